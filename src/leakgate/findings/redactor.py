"""Secret value redaction for safe output."""

from __future__ import annotations


def redact(value: str) -> str:
    """Partial reveal: first 4 + last 2 chars; short values are hidden entirely.

    Example: ``ghp_Abc123xyz9`` → ``ghp_...z9``
    """
    if len(value) <= 8:
        return "[REDACTED]"
    return f"{value[:4]}...{value[-2:]}"
