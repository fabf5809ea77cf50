"""Finding model, results aggregation, and redaction."""

from leakgate.findings.aggregator import Results
from leakgate.findings.models import Finding
from leakgate.findings.redactor import redact

__all__ = ["Finding", "Results", "redact"]
