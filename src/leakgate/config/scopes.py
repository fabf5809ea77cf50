"""Built-in scopes: ecosystem artifacts known to look like secrets but aren't."""

from __future__ import annotations

from typing import Dict, Tuple

# Every detector is ignored for scope-derived entries.
ALL_DETECTORS = "*"

KNOWN_SCOPES: Dict[str, Tuple[str, ...]] = {
    "node": ("pnpm-lock.yaml", "yarn.lock", "package-lock.json"),
    "go": ("makefile", "go.mod", "go.sum", "Gopkg.toml", "Gopkg.lock", "glide.yaml", "glide.lock"),
    "images": ("*.jpeg", "*.jpg", "*.png", "*.tiff", "*.bmp"),
    "bazel": ("*.bzl",),
    "terraform": (".terraform.lock.hcl", "*.terraform.lock.hcl"),
    "php": ("composer.lock",),
    "python": ("poetry.lock", "Pipfile.lock", "requirements.txt"),
}


def scope_patterns(scope_name: str) -> Tuple[str, ...]:
    """Return the file patterns for *scope_name*, or an empty tuple if unknown."""
    return KNOWN_SCOPES.get(scope_name.strip().lower(), ())
