"""The ``pattern`` detector: curated regular expressions for credential shapes."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence

from leakgate.detectors.models import Pattern, decode_text
from leakgate.findings.models import Finding
from leakgate.findings.redactor import redact
from leakgate.git.models import Addition

logger = logging.getLogger(__name__)


def custom_patterns(regexes: Iterable[str]) -> List[Pattern]:
    """Turn ``custom_patterns`` from the RC into Patterns, dropping invalid ones."""
    patterns: List[Pattern] = []
    for regex in regexes:
        try:
            re.compile(regex)
        except re.error as exc:
            logger.warning("Ignoring invalid custom pattern %r: %s", regex, exc)
            continue
        patterns.append(
            Pattern(
                id="CUSTOM_PATTERN",
                name="Custom Pattern",
                description=f"Matches custom pattern {regex}",
                severity="high",
                regex=regex,
            )
        )
    return patterns


class PatternDetector:
    """Applies every pattern to every added line; one finding per pattern per line."""

    name = "pattern"

    def __init__(self, patterns: Sequence[Pattern]) -> None:
        self.patterns = list(patterns)

    def detect(self, addition: Addition) -> List[Finding]:
        if not addition.content:
            return []
        text = decode_text(addition, self.name)
        findings: List[Finding] = []
        for line_no, line in enumerate(text.splitlines(), 1):
            for pattern in self.patterns:
                m = pattern.compiled.search(line)
                if m is None:
                    continue
                secret = m.groupdict().get("secret") or m.group(0)
                findings.append(
                    Finding(
                        path=addition.path,
                        detector_name=self.name,
                        message=f"{pattern.name} found: {redact(secret)} (added line {line_no})",
                        severity=pattern.severity,
                        rule_id=pattern.id,
                        commit=addition.commit,
                    )
                )
        return findings
