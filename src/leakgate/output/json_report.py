"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from leakgate import __version__
from leakgate.findings.models import Finding
from leakgate.scanner.models import ScanOutcome


def _finding_dict(finding: Finding, *, failure: bool) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "path": finding.path,
        "detector": finding.detector_name,
        "rule": finding.rule_id,
        "severity": finding.severity,
        "level": "error" if failure else "warning",
        "message": finding.message,
    }
    if finding.commit is not None:
        entry["commit"] = {
            "sha": finding.commit.sha,
            "author": finding.commit.author,
            "date": finding.commit.date,
            "subject": finding.commit.subject,
        }
    return entry


def to_dict(outcome: ScanOutcome, *, suggestion: Optional[str] = None) -> Dict[str, Any]:
    """Convert a ScanOutcome to a JSON-serialisable dict."""
    results = outcome.results
    findings: List[Dict[str, Any]] = [
        _finding_dict(f, failure=results.is_failure(f)) for f in results.all()
    ]
    report: Dict[str, Any] = {
        "version": __version__,
        "mode": outcome.mode.value,
        "status": outcome.status.value,
        "exit_code": outcome.exit_code,
        "incomplete": outcome.incomplete,
        "threshold": results.threshold,
        "scanned": outcome.scanned,
        "skipped": outcome.skipped,
        "total_findings": len(findings),
        "findings": findings,
        "duration_ms": outcome.duration_ms,
    }
    if suggestion:
        report["suggested_talismanrc"] = suggestion
    return report


def render(outcome: ScanOutcome, *, suggestion: Optional[str] = None) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(outcome, suggestion=suggestion), indent=2)
