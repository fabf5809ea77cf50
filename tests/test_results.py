"""Tests for the results aggregator and redaction."""

import threading

from leakgate.findings.aggregator import Results
from leakgate.findings.models import Finding
from leakgate.findings.redactor import redact
from leakgate.git.models import CommitContext


def _finding(path="a.txt", detector="pattern", severity="high", message="m"):
    return Finding(path=path, detector_name=detector, message=message, severity=severity)


class TestResults:
    def test_empty(self):
        results = Results()
        assert not results.has_findings()
        assert not results.has_failures()
        assert results.render() == "No secrets found."

    def test_grouped_in_first_occurrence_order(self):
        results = Results()
        results.add([_finding("b.txt"), _finding("a.txt", detector="filename")])
        results.add([_finding("b.txt", detector="filecontent")])
        grouped = results.grouped()
        assert list(grouped) == ["b.txt", "a.txt"]
        assert [f.detector_name for f in grouped["b.txt"]] == ["pattern", "filecontent"]
        assert results.paths() == ["b.txt", "a.txt"]
        assert len(results) == 3

    def test_findings_for(self):
        results = Results()
        results.add([_finding("x")])
        assert len(results.findings_for("x")) == 1
        assert results.findings_for("missing") == []

    def test_threshold_splits_failures_and_warnings(self):
        results = Results(threshold="high")
        results.add([_finding(severity="medium"), _finding(severity="critical")])
        assert [f.severity for f in results.failures()] == ["critical"]
        assert [f.severity for f in results.warnings()] == ["medium"]
        assert results.has_failures()
        assert results.has_warnings()

    def test_below_threshold_is_not_failure(self):
        results = Results(threshold="critical")
        results.add([_finding(severity="high")])
        assert results.has_findings()
        assert not results.has_failures()

    def test_empty_batch(self):
        results = Results()
        results.add([])
        assert not results.has_findings()

    def test_concurrent_adds(self):
        results = Results()

        def worker(n):
            for i in range(50):
                results.add([_finding(f"f{n}.txt", message=str(i))])

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(results) == 400
        assert all(len(results.findings_for(f"f{n}.txt")) == 50 for n in range(8))

    def test_render(self):
        results = Results(threshold="high")
        results.add([_finding("a.txt", severity="high", message="bad"), _finding("a.txt", severity="low", message="meh")])
        text = results.render()
        assert text.splitlines()[0] == "a.txt"
        assert "error: [high] pattern: bad" in text
        assert "warning: [low] pattern: meh" in text


class TestFinding:
    def test_describe_with_commit(self):
        f = Finding("a", "pattern", "msg", "high", commit=CommitContext(sha="0123456789"))
        assert f.describe() == "[high] pattern: msg (commit 01234567)"


class TestRedact:
    def test_partial(self):
        assert redact("ghp_Abc123xyz9") == "ghp_...z9"

    def test_short_value_hidden(self):
        assert redact("12345678") == "[REDACTED]"
