"""Built-in detection tables — aggregate all categories."""

from leakgate.detectors.builtin.aws import ALL_AWS_PATTERNS
from leakgate.detectors.builtin.filenames import ALL_FILENAME_RULES
from leakgate.detectors.builtin.keys import ALL_KEY_PATTERNS
from leakgate.detectors.builtin.passwords import ALL_PASSWORD_PATTERNS
from leakgate.detectors.builtin.tokens import ALL_TOKEN_PATTERNS
from leakgate.detectors.models import Pattern

ALL_BUILTIN_PATTERNS: list[Pattern] = [
    *ALL_AWS_PATTERNS,
    *ALL_TOKEN_PATTERNS,
    *ALL_KEY_PATTERNS,
    *ALL_PASSWORD_PATTERNS,
]

__all__ = ["ALL_BUILTIN_PATTERNS", "ALL_FILENAME_RULES"]
