"""The ``filename`` detector: flags sensitive files by name alone."""

from __future__ import annotations

from typing import List, Sequence

from leakgate.detectors.models import FilenameRule
from leakgate.findings.models import Finding
from leakgate.git.models import Addition, path_matches


class FilenameDetector:
    name = "filename"

    def __init__(self, rules: Sequence[FilenameRule]) -> None:
        self.rules = list(rules)

    def detect(self, addition: Addition) -> List[Finding]:
        if not addition.content:
            return []
        findings: List[Finding] = []
        for rule in self.rules:
            if any(path_matches(addition.name, pat) for pat in rule.file_patterns):
                findings.append(
                    Finding(
                        path=addition.path,
                        detector_name=self.name,
                        message=f"The file name {addition.name!r} looks like a {rule.name.lower()}",
                        severity=rule.severity,
                        rule_id=rule.id,
                        commit=addition.commit,
                    )
                )
        return findings
