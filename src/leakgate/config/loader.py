"""Load runtime settings from .leakgate.toml and LEAKGATE_* env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from leakgate.config.schema import (
    OUTPUT_FORMATS,
    LeakgateSettings,
    LoggingSettings,
    OutputSettings,
    ScanSettings,
)

SETTINGS_FILENAME = ".leakgate.toml"


class ConfigError(Exception):
    """Raised when a configuration file is malformed or unreadable."""


def find_settings_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the settings file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / SETTINGS_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(settings: LeakgateSettings) -> None:
    """Apply LEAKGATE_* environment variable overrides; bad values are ignored."""
    if val := os.environ.get("LEAKGATE_WORKERS"):
        try:
            settings.scan.workers = max(1, int(val))
        except ValueError:
            pass
    if val := os.environ.get("LEAKGATE_TIMEOUT"):
        try:
            settings.scan.timeout = float(val)
        except ValueError:
            pass
    if val := os.environ.get("LEAKGATE_FORMAT"):
        if val in OUTPUT_FORMATS:
            settings.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("LEAKGATE_LOG_LEVEL"):
        settings.logging.level = val.lower()


def load_settings(repo_root: Path, config_override: Optional[str] = None) -> LeakgateSettings:
    """Load, validate, and return LeakgateSettings."""
    path = find_settings_file(repo_root, config_override)

    if path is None:
        settings = LeakgateSettings()
    else:
        raw = _parse_toml(path)
        try:
            settings = LeakgateSettings(
                version=str(raw.get("version", "1.0")),
                scan=_build_section(raw, ScanSettings, "scan"),
                output=_build_section(raw, OutputSettings, "output"),
                logging=_build_section(raw, LoggingSettings, "logging"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Invalid settings in {path}: {exc}") from exc
        if settings.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format in {path}: {settings.output.format}")

    _merge_env_overrides(settings)
    return settings
