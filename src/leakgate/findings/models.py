"""Finding data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from leakgate.git.models import CommitContext


@dataclass(frozen=True)
class Finding:
    """One detector's report of suspected secret content in one Addition.

    ``message`` is safe to print: any matched value in it is already redacted.
    """

    path: str
    detector_name: str
    message: str
    severity: str
    rule_id: Optional[str] = None  # pattern / filename rule that fired, when there is one
    commit: Optional[CommitContext] = None

    def describe(self) -> str:
        where = f" (commit {self.commit.short_sha})" if self.commit else ""
        return f"[{self.severity}] {self.detector_name}: {self.message}{where}"
