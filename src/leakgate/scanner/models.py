"""Scan modes, lifecycle states and the outcome of one scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from leakgate.findings.aggregator import Results


class ScanMode(str, Enum):
    CURRENT = "current"  # staged / range / tree, .talismanrc honoured
    HISTORY = "history"  # every commit, nothing suppressed


class ScanState(str, Enum):
    INITIALIZED = "initialized"
    COLLECTING = "collecting"
    EVALUATING = "evaluating"
    REPORTING = "reporting"
    DONE = "done"


class ScanStatus(str, Enum):
    CLEAN = "clean"
    FLAGGED = "flagged"
    INCOMPLETE = "incomplete"


_EXIT_CODES = {
    ScanStatus.CLEAN: 0,
    ScanStatus.FLAGGED: 1,
    ScanStatus.INCOMPLETE: 2,
}


@dataclass
class ScanOutcome:
    """Complete result of a scan run."""

    mode: ScanMode
    results: Results
    incomplete: bool = False
    scanned: int = 0
    skipped: List[str] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def status(self) -> ScanStatus:
        if self.incomplete:
            return ScanStatus.INCOMPLETE
        if self.results.has_findings():
            return ScanStatus.FLAGGED
        return ScanStatus.CLEAN

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self.status]
