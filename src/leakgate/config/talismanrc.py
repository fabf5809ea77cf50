"""The ``.talismanrc`` suppression policy: model, scope expansion and YAML loading.

Format::

    fileignoreconfig:
      - filename: go.sum
        checksum: 582093519ae682d5170aecc9b935af7e90ed528c577ecd2c9dd1fad8f4924ab9
        ignore_detectors: [filecontent]
    scopeconfig:
      - scope: go
    custom_patterns:
      - "internal-[0-9a-f]{32}"
    threshold: medium
    version: "1.0"

``threshold`` ranks findings in reports; it never lets one through.
The core treats a loaded TalismanRC as read-only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

import yaml

from leakgate.config.loader import ConfigError
from leakgate.config.schema import SEVERITY_ORDER
from leakgate.config.scopes import ALL_DETECTORS, scope_patterns
from leakgate.git.models import path_matches

logger = logging.getLogger(__name__)

TALISMANRC_FILENAME = ".talismanrc"


@dataclass(frozen=True)
class FileIgnoreConfig:
    file_name: str
    checksum: str = ""
    ignore_detectors: FrozenSet[str] = frozenset()

    def matches(self, path: str) -> bool:
        return path_matches(path, self.file_name)

    def checksum_matches(self, digest: str) -> bool:
        return bool(self.checksum) and self.checksum == digest

    def is_detector_ignored(self, detector_name: str) -> bool:
        return ALL_DETECTORS in self.ignore_detectors or detector_name in self.ignore_detectors


@dataclass(frozen=True)
class ScopeConfig:
    scope_name: str


@dataclass
class TalismanRC:
    file_ignore_config: List[FileIgnoreConfig] = field(default_factory=list)
    scope_config: List[ScopeConfig] = field(default_factory=list)
    custom_patterns: List[str] = field(default_factory=list)
    threshold: str = "low"
    version: str = "1.0"

    def effective_file_ignore_config(self) -> List[FileIgnoreConfig]:
        """Merge explicit entries with the entries implied by scopes.

        A scope entry for a pattern that already has an explicit entry is
        dropped, so explicit configuration is never overridden by a default.
        """
        effective = list(self.file_ignore_config)
        explicit = {entry.file_name for entry in self.file_ignore_config}
        for scope in self.scope_config:
            patterns = scope_patterns(scope.scope_name)
            if not patterns:
                logger.warning("Unknown scope %r in %s; ignoring it", scope.scope_name, TALISMANRC_FILENAME)
                continue
            for pattern in patterns:
                if pattern in explicit:
                    continue
                explicit.add(pattern)
                effective.append(FileIgnoreConfig(file_name=pattern, ignore_detectors=frozenset({ALL_DETECTORS})))
        return effective

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TalismanRC":
        """Build a TalismanRC from parsed YAML, dropping entries it cannot use."""
        return cls(
            file_ignore_config=_parse_file_ignores(data.get("fileignoreconfig") or []),
            scope_config=_parse_scopes(data.get("scopeconfig") or []),
            custom_patterns=_parse_custom_patterns(data.get("custom_patterns") or []),
            threshold=_parse_threshold(data.get("threshold")),
            version=str(data.get("version", "1.0")),
        )


def _parse_file_ignores(raw: Any) -> List[FileIgnoreConfig]:
    if not isinstance(raw, list):
        logger.warning("fileignoreconfig must be a list; ignoring it")
        return []
    entries: List[FileIgnoreConfig] = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("filename"):
            logger.warning("Skipping fileignoreconfig entry without a filename: %r", item)
            continue
        detectors = item.get("ignore_detectors") or []
        if isinstance(detectors, str):
            detectors = [detectors]
        if not isinstance(detectors, list):
            logger.warning("ignore_detectors for %s must be a list; ignoring it", item["filename"])
            detectors = []
        entries.append(
            FileIgnoreConfig(
                file_name=str(item["filename"]),
                checksum=str(item.get("checksum") or ""),
                ignore_detectors=frozenset(str(d) for d in detectors),
            )
        )
    return entries


def _parse_scopes(raw: Any) -> List[ScopeConfig]:
    if not isinstance(raw, list):
        logger.warning("scopeconfig must be a list; ignoring it")
        return []
    return [
        ScopeConfig(scope_name=str(item["scope"]))
        for item in raw
        if isinstance(item, dict) and item.get("scope")
    ]


def _parse_custom_patterns(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        logger.warning("custom_patterns must be a list; ignoring it")
        return []
    patterns: List[str] = []
    for item in raw:
        # both "- regex" and "- pattern: regex" spellings are accepted
        if isinstance(item, dict):
            item = item.get("pattern")
        if item:
            patterns.append(str(item))
    return patterns


def _parse_threshold(raw: Any) -> str:
    if raw is None:
        return "low"
    value = str(raw).lower()
    if value not in SEVERITY_ORDER:
        logger.warning("Unknown threshold %r; using 'low'", raw)
        return "low"
    return value


def find_talismanrc(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the RC file. *override* takes precedence and must exist."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"{TALISMANRC_FILENAME} not found: {override}")
        return p
    candidate = repo_root / TALISMANRC_FILENAME
    return candidate if candidate.is_file() else None


def load_talismanrc(repo_root: Path, override: Optional[str] = None) -> TalismanRC:
    """Load, validate, and return the TalismanRC for *repo_root*."""
    path = find_talismanrc(repo_root, override)
    if path is None:
        return TalismanRC()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if data is None:
        return TalismanRC()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return TalismanRC.from_dict(data)
