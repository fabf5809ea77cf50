"""The ``filesize`` detector: large additions often carry embedded key material."""

from __future__ import annotations

from typing import List

from leakgate.findings.models import Finding
from leakgate.git.models import Addition

DEFAULT_MAX_SIZE = 1024 * 1024


class FileSizeDetector:
    name = "filesize"

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self.max_size = max_size

    def detect(self, addition: Addition) -> List[Finding]:
        if addition.size <= self.max_size:
            return []
        return [
            Finding(
                path=addition.path,
                detector_name=self.name,
                message=f"The file is larger than {self.max_size // 1024} KiB ({addition.size} bytes added)",
                severity="medium",
                rule_id="LARGE_FILE",
                commit=addition.commit,
            )
        ]
