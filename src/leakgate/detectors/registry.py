"""Detector registry — the ordered list every scan runs through."""

from __future__ import annotations

from typing import List, Optional, Protocol

from leakgate.config.talismanrc import TalismanRC
from leakgate.detectors.builtin import ALL_BUILTIN_PATTERNS, ALL_FILENAME_RULES
from leakgate.detectors.entropy import EntropyDetector
from leakgate.detectors.filename import FilenameDetector
from leakgate.detectors.filesize import DEFAULT_MAX_SIZE, FileSizeDetector
from leakgate.detectors.pattern import PatternDetector, custom_patterns
from leakgate.findings.models import Finding
from leakgate.git.models import Addition


class Detector(Protocol):
    """Anything with a ``name`` and a side-effect-free ``detect``."""

    name: str

    def detect(self, addition: Addition) -> List[Finding]: ...


def default_detectors(
    talisman_rc: Optional[TalismanRC] = None,
    max_file_size: int = DEFAULT_MAX_SIZE,
) -> List[Detector]:
    """Build the default detector list; new detectors are appended here."""
    patterns = list(ALL_BUILTIN_PATTERNS)
    if talisman_rc is not None:
        patterns.extend(custom_patterns(talisman_rc.custom_patterns))
    return [
        FilenameDetector(ALL_FILENAME_RULES),
        FileSizeDetector(max_file_size),
        EntropyDetector(),
        PatternDetector(patterns),
    ]
