"""Results aggregation — findings per path, in the order they were recorded."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Dict, Iterable, List

from leakgate.config.schema import severity_at_or_above
from leakgate.findings.models import Finding


class Results:
    """Findings of one scan, keyed by Addition path.

    Writes are serialised with a lock so worker threads may record directly.
    Findings are never removed: suppression happens before detection, so
    nothing here can hide a finding once it exists. The threshold only ranks
    findings for reporting; any recorded finding flags the scan.
    """

    def __init__(self, threshold: str = "low") -> None:
        self.threshold = threshold
        self._lock = threading.Lock()
        self._by_path: "OrderedDict[str, List[Finding]]" = OrderedDict()

    def add(self, findings: Iterable[Finding]) -> None:
        """Record a batch of findings atomically."""
        batch = list(findings)
        if not batch:
            return
        with self._lock:
            for finding in batch:
                self._by_path.setdefault(finding.path, []).append(finding)

    # ---- queries ----

    def _snapshot(self) -> Dict[str, List[Finding]]:
        with self._lock:
            return OrderedDict((path, list(items)) for path, items in self._by_path.items())

    def grouped(self) -> Dict[str, List[Finding]]:
        """Path → findings, paths ordered by first occurrence."""
        return self._snapshot()

    def paths(self) -> List[str]:
        return list(self._snapshot())

    def findings_for(self, path: str) -> List[Finding]:
        with self._lock:
            return list(self._by_path.get(path, []))

    def all(self) -> List[Finding]:
        return [f for items in self._snapshot().values() for f in items]

    def is_failure(self, finding: Finding) -> bool:
        return severity_at_or_above(finding.severity, self.threshold)

    def failures(self) -> List[Finding]:
        return [f for f in self.all() if self.is_failure(f)]

    def warnings(self) -> List[Finding]:
        return [f for f in self.all() if not self.is_failure(f)]

    def has_findings(self) -> bool:
        with self._lock:
            return bool(self._by_path)

    def has_failures(self) -> bool:
        return bool(self.failures())

    def has_warnings(self) -> bool:
        return bool(self.warnings())

    def __len__(self) -> int:
        return len(self.all())

    # ---- rendering ----

    def render(self) -> str:
        """Plain-text report grouped by path."""
        if not self.has_findings():
            return "No secrets found."
        lines: List[str] = []
        for path, findings in self.grouped().items():
            lines.append(path)
            for finding in findings:
                kind = "error" if self.is_failure(finding) else "warning"
                lines.append(f"  {kind}: {finding.describe()}")
        return "\n".join(lines)
