"""The ``filecontent`` detector: high-entropy strings and card numbers.

Thresholds are fixed on purpose. The only lever for silencing this detector
is the suppression policy in ``.talismanrc``.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Iterator, List, Tuple

from leakgate.detectors.models import decode_text
from leakgate.findings.models import Finding
from leakgate.findings.redactor import redact
from leakgate.git.models import Addition

MIN_LENGTH = 20
# A run of n characters tops out at log2(n) bits, so a non-hex run needs at
# least 23 characters to clear this; hex runs (max 4 bits) fire from 20.
BASE64_THRESHOLD = 4.5
HEX_THRESHOLD = 3.0
WINDOW = 64
STRIDE = 32

# Split on whitespace, quotes, assignment operators and brackets
_TOKEN_RE = re.compile(r"""[^\s=:;,'"`<>(){}\[\]]+""")
_BASE64_RUN_RE = re.compile(rf"[A-Za-z0-9+/_\-]{{{MIN_LENGTH},}}")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_CARD_RE = re.compile(r"(?<![\d-])[3-6]\d{3}(?:[ -]?\d{2,4}){2,4}(?![\d-])")


def shannon_entropy(s: str) -> float:
    """Compute Shannon entropy (bits per character) of string *s*.

    H = -Σ p(c) · log₂(p(c))  over unique characters c.
    """
    if not s:
        return 0.0
    counts = Counter(s)
    total = len(s)
    return -sum((c / total) * math.log2(c / total) for c in counts.values())


def windows(run: str, size: int = WINDOW, stride: int = STRIDE) -> Iterator[str]:
    """Yield *run* itself, or overlapping windows of it when it is long."""
    if len(run) <= size:
        yield run
        return
    for start in range(0, len(run) - size + 1, stride):
        yield run[start:start + size]
    if (len(run) - size) % stride:
        yield run[-size:]


def extract_candidates(line: str) -> List[str]:
    """Contiguous base64/hex-alphabet runs of at least MIN_LENGTH characters."""
    candidates: List[str] = []
    for token in _TOKEN_RE.findall(line):
        candidates.extend(_BASE64_RUN_RE.findall(token))
    return candidates


def classify(run: str) -> Tuple[str, float]:
    """Return the (encoding, threshold) a run is judged against."""
    if _HEX_RE.match(run):
        return "hex", HEX_THRESHOLD
    return "base64", BASE64_THRESHOLD


def find_high_entropy(line: str) -> List[Tuple[str, str, float]]:
    """Return (run, encoding, entropy) for each run on *line* over its threshold."""
    hits: List[Tuple[str, str, float]] = []
    for run in extract_candidates(line):
        if run.isdigit():
            continue  # plain numbers are left to the card check
        encoding, threshold = classify(run)
        peak = max(shannon_entropy(w) for w in windows(run))
        if peak > threshold:
            hits.append((run, encoding, peak))
    return hits


def luhn_valid(number: str) -> bool:
    digits = [int(c) for c in number if c.isdigit()]
    if not 13 <= len(digits) <= 19:
        return False
    checksum = 0
    for i, n in enumerate(reversed(digits)):
        if i % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        checksum += n
    return checksum % 10 == 0


def find_card_numbers(line: str) -> List[str]:
    return [m.group(0) for m in _CARD_RE.finditer(line) if luhn_valid(m.group(0))]


class EntropyDetector:
    name = "filecontent"

    def detect(self, addition: Addition) -> List[Finding]:
        if not addition.content:
            return []
        text = decode_text(addition, self.name)
        findings: List[Finding] = []
        for line_no, line in enumerate(text.splitlines(), 1):
            for run, encoding, entropy in find_high_entropy(line):
                findings.append(
                    Finding(
                        path=addition.path,
                        detector_name=self.name,
                        message=(
                            f"Expected file to not contain {encoding} encoded texts such as: "
                            f"{redact(run)} (entropy {entropy:.2f}, added line {line_no})"
                        ),
                        severity="medium" if encoding == "hex" else "high",
                        rule_id=f"HIGH_ENTROPY_{encoding.upper()}",
                        commit=addition.commit,
                    )
                )
            for number in find_card_numbers(line):
                findings.append(
                    Finding(
                        path=addition.path,
                        detector_name=self.name,
                        message=f"Expected file to not contain credit card numbers such as: {redact(number)} (added line {line_no})",
                        severity="high",
                        rule_id="CREDIT_CARD_NUMBER",
                        commit=addition.commit,
                    )
                )
        return findings
