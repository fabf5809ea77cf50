"""Configuration: runtime settings, the .talismanrc policy, and scopes."""

from leakgate.config.loader import ConfigError, load_settings
from leakgate.config.schema import LeakgateSettings, Severity, severity_at_or_above
from leakgate.config.talismanrc import (
    FileIgnoreConfig,
    ScopeConfig,
    TalismanRC,
    load_talismanrc,
)

__all__ = [
    "ConfigError",
    "FileIgnoreConfig",
    "LeakgateSettings",
    "ScopeConfig",
    "Severity",
    "TalismanRC",
    "load_settings",
    "load_talismanrc",
    "severity_at_or_above",
]
