"""Detector building blocks: pattern and filename rule models, errors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from leakgate.config.schema import Severity
from leakgate.git.models import Addition


class DetectorError(Exception):
    """A detector could not analyse one Addition; the scan goes on without it."""


class BinaryContentError(DetectorError):
    """Raised by content detectors handed bytes that are not text."""


def decode_text(addition: Addition, detector_name: str) -> str:
    """Return the Addition's content as text, or raise BinaryContentError."""
    if addition.is_binary:
        raise BinaryContentError(f"{detector_name}: {addition.path} is binary")
    return addition.content.decode("utf-8", errors="replace")


@dataclass
class Pattern:
    """A credential shape searched for in added text.

    ``regex`` is stored as a raw string so the table stays readable; it is
    compiled on first access via ``compiled``. A named group ``secret`` marks
    the part of the match that gets redacted in messages.
    """

    id: str
    name: str
    description: str
    severity: Severity
    regex: str

    _compiled: Optional[re.Pattern[str]] = field(default=None, init=False, repr=False, compare=False)

    @property
    def compiled(self) -> re.Pattern[str]:
        if self._compiled is None:
            self._compiled = re.compile(self.regex)
        return self._compiled


@dataclass(frozen=True)
class FilenameRule:
    """Flags files by name alone, whatever their content."""

    id: str
    name: str
    severity: Severity
    file_patterns: Tuple[str, ...]
