"""Detectors — independent analysers, each turning one Addition into findings."""

from leakgate.detectors.entropy import EntropyDetector, shannon_entropy
from leakgate.detectors.filename import FilenameDetector
from leakgate.detectors.filesize import FileSizeDetector
from leakgate.detectors.models import BinaryContentError, DetectorError, FilenameRule, Pattern, decode_text
from leakgate.detectors.pattern import PatternDetector
from leakgate.detectors.registry import Detector, default_detectors

__all__ = [
    "BinaryContentError",
    "Detector",
    "DetectorError",
    "EntropyDetector",
    "FileSizeDetector",
    "FilenameDetector",
    "FilenameRule",
    "Pattern",
    "PatternDetector",
    "decode_text",
    "default_detectors",
    "shannon_entropy",
]
