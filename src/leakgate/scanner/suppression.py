"""Suppression policy — decides, before a detector runs, whether to skip it.

Two evaluators share one interface:

  - ``IgnoreEvaluator`` (current-scan mode) honours ``.talismanrc``: an entry
    whose pattern matches the addition suppresses every detector when its
    checksum equals the live collective checksum, and suppresses the detectors
    it lists in ``ignore_detectors`` unconditionally. Any authorising entry is
    enough.
  - ``ScanHistoryEvaluator`` (history-scan mode) never suppresses. A checksum
    taken from today's tree says nothing about content added and removed in
    the past.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from leakgate.config.talismanrc import FileIgnoreConfig, TalismanRC
from leakgate.git.models import Addition
from leakgate.scanner.checksum import ChecksumCalculator
from leakgate.scanner.models import ScanMode

logger = logging.getLogger(__name__)


class IgnoreEvaluator:
    def __init__(self, calculator: ChecksumCalculator, talisman_rc: TalismanRC) -> None:
        self.calculator = calculator
        self.talisman_rc = talisman_rc
        self._entries: List[FileIgnoreConfig] = talisman_rc.effective_file_ignore_config()

    def _matching(self, addition: Addition) -> List[FileIgnoreConfig]:
        return [entry for entry in self._entries if entry.matches(addition.path)]

    def _checksum_authorizes(self, entry: FileIgnoreConfig) -> bool:
        if not entry.checksum:
            return False
        current = self.calculator.calculate_collective_checksum_for_pattern(entry.file_name)
        if entry.checksum_matches(current):
            return True
        logger.info(
            "Checksum for %s no longer matches .talismanrc (content changed); scanning it",
            entry.file_name,
        )
        return False

    def should_ignore(self, addition: Addition, detector_name: str) -> bool:
        for entry in self._matching(addition):
            if entry.is_detector_ignored(detector_name):
                logger.info("Ignoring %s for detector %s per .talismanrc", addition.path, detector_name)
                return True
            if self._checksum_authorizes(entry):
                return True
        return False

    def is_scan_not_required(self, addition: Addition) -> bool:
        """True when a matching entry's checksum vouches for the content.

        Such an entry makes ``should_ignore`` true for every detector, so
        skipping the addition up front cannot change the outcome.
        """
        return any(self._checksum_authorizes(entry) for entry in self._matching(addition))


class ScanHistoryEvaluator:
    """Always scan: no configuration is consulted."""

    def should_ignore(self, addition: Addition, detector_name: str) -> bool:
        return False

    def is_scan_not_required(self, addition: Addition) -> bool:
        return False


Evaluator = Union[IgnoreEvaluator, ScanHistoryEvaluator]


def evaluator_for(mode: ScanMode, calculator: Optional[ChecksumCalculator], talisman_rc: Optional[TalismanRC]) -> Evaluator:
    """Pick the evaluator for *mode*; history scans never look at the RC."""
    if mode is ScanMode.HISTORY:
        return ScanHistoryEvaluator()
    if calculator is None or talisman_rc is None:
        raise ValueError("current-mode scans need a checksum calculator and a TalismanRC")
    return IgnoreEvaluator(calculator, talisman_rc)
