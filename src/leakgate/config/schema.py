"""Configuration schema — severities and runtime settings dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

Severity = Literal["low", "medium", "high", "critical"]

SEVERITY_ORDER: dict[str, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
    "critical": 3,
}

OUTPUT_FORMATS = ("terminal", "json")


def severity_at_or_above(finding_sev: str, threshold: str) -> bool:
    """Return True if *finding_sev* is at or above *threshold*."""
    return SEVERITY_ORDER.get(finding_sev, 0) >= SEVERITY_ORDER.get(threshold, 0)


@dataclass
class ScanSettings:
    workers: int = 1
    timeout: Optional[float] = None  # seconds; None = no deadline
    max_file_size_kb: int = 1024


@dataclass
class OutputSettings:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True


@dataclass
class LoggingSettings:
    level: str = "error"


@dataclass
class LeakgateSettings:
    """Runtime settings read from ``.leakgate.toml``; policy lives in ``.talismanrc``."""

    version: str = "1.0"
    scan: ScanSettings = field(default_factory=ScanSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
