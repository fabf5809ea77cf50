"""Collective checksums — one stable fingerprint per file pattern.

The digest covers every known file whose path matches the pattern, taken in
sorted path order: each path's UTF-8 bytes followed by its content. It is
unaffected by the order additions arrive in and changes as soon as any
matched byte does. A pattern matching nothing yields the SHA-256 of the
empty input, never an error.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from leakgate.git.adapter import GitError, read_blob, tree_additions
from leakgate.git.models import Addition, path_matches

logger = logging.getLogger(__name__)

EMPTY_DIGEST = hashlib.sha256(b"").hexdigest()


class ChecksumCalculator:
    """Computes collective checksums over a fixed set of additions.

    When *repo_root* and *rev* are given, a matched file's content is read
    whole from that revision (``""`` is the index), so a digest pasted into
    ``.talismanrc`` covers the file being committed rather than just the lines
    a change added. The working tree is never read: it can differ from what is
    committed. Without a revision each Addition contributes its own bytes.
    """

    def __init__(
        self,
        additions: Iterable[Addition],
        repo_root: Optional[Path] = None,
        rev: Optional[str] = None,
    ) -> None:
        self._additions: Dict[str, Addition] = {}
        for addition in additions:
            self._additions.setdefault(addition.path, addition)
        self._repo_root = repo_root
        self._rev = rev
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    @classmethod
    def for_revision(cls, repo_root: Path, rev: Optional[str] = None) -> "ChecksumCalculator":
        """A calculator over every tracked file at *rev* (the index by default)."""
        return cls(tree_additions(repo_root, rev))

    def _content(self, addition: Addition) -> bytes:
        if self._repo_root is None or self._rev is None:
            return addition.content
        try:
            return read_blob(self._repo_root, self._rev, addition.path)
        except GitError as exc:
            logger.warning("Could not read %s for checksum, using scanned content: %s", addition.path, exc)
            return addition.content

    def matching_paths(self, pattern: str) -> List[str]:
        return sorted(path for path in self._additions if path_matches(path, pattern))

    def calculate_collective_checksum_for_pattern(self, pattern: str) -> str:
        with self._lock:
            cached = self._cache.get(pattern)
        if cached is not None:
            return cached

        digest = hashlib.sha256()
        for path in self.matching_paths(pattern):
            digest.update(path.encode("utf-8"))
            digest.update(self._content(self._additions[path]))
        value = digest.hexdigest()

        with self._lock:
            self._cache[pattern] = value
        return value

    def suggest_talismanrc(self, patterns: Iterable[str]) -> str:
        """Render ready-to-paste ``fileignoreconfig`` entries for *patterns*."""
        entries = []
        for pattern in dict.fromkeys(patterns):
            entries.append(
                {
                    "filename": pattern,
                    "checksum": self.calculate_collective_checksum_for_pattern(pattern),
                }
            )
        return yaml.safe_dump({"fileignoreconfig": entries}, sort_keys=False, default_flow_style=False)
