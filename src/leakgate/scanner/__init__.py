"""Scan orchestration — checksums, suppression and the scan engine."""

from leakgate.scanner.checksum import EMPTY_DIGEST, ChecksumCalculator
from leakgate.scanner.engine import ScanError, Scanner, scan
from leakgate.scanner.models import ScanMode, ScanOutcome, ScanState, ScanStatus
from leakgate.scanner.suppression import IgnoreEvaluator, ScanHistoryEvaluator, evaluator_for

__all__ = [
    "EMPTY_DIGEST",
    "ChecksumCalculator",
    "IgnoreEvaluator",
    "ScanError",
    "ScanHistoryEvaluator",
    "ScanMode",
    "ScanOutcome",
    "ScanState",
    "ScanStatus",
    "Scanner",
    "evaluator_for",
    "scan",
]
