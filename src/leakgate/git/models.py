"""Data models for diff parsing and the Addition unit of work."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from enum import Enum
from fnmatch import translate
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

# git treats a blob as binary when a NUL byte shows up in the first 8000 bytes
_BINARY_SNIFF_BYTES = 8000


class LineType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single parsed line from a unified diff."""

    file: str
    line_no: int
    content: str
    line_type: LineType


@dataclass(frozen=True)
class DiffFile:
    """Metadata about a file appearing in a diff."""

    path: str
    old_path: Optional[str] = None  # set on renames
    status: FileStatus = FileStatus.MODIFIED


@dataclass(frozen=True)
class FileSkipped:
    """Record of a file the diff parser could not turn into added lines."""

    path: str
    reason: str  # 'binary', 'mode_only'


@dataclass(frozen=True)
class CommitContext:
    """Identifies the commit that introduced an Addition (history scans only)."""

    sha: str
    author: str = ""
    date: str = ""
    subject: str = ""

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


@dataclass(frozen=True)
class Addition:
    """One unit of newly introduced content under scan.

    ``content`` holds only what the change added: for a text diff the added
    lines, for a binary file the blob as stored by git. ``commit`` is set in
    history scans and is used for reporting, never for suppression.
    """

    path: str
    content: bytes
    commit: Optional[CommitContext] = None

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def is_binary(self) -> bool:
        return b"\x00" in self.content[:_BINARY_SNIFF_BYTES]

    @property
    def size(self) -> int:
        return len(self.content)

    def matches(self, pattern: str) -> bool:
        return path_matches(self.path, pattern)


def _is_malformed(pattern: str) -> bool:
    if not pattern or not pattern.strip():
        return True
    depth = 0
    for ch in pattern:
        if ch == "[":
            depth += 1
        elif ch == "]" and depth:
            depth -= 1
    return depth != 0


@lru_cache(maxsize=1024)
def _compile_glob(pattern: str) -> Optional[re.Pattern[str]]:
    """Compile *pattern*, or return None (warning once) when it is malformed."""
    if _is_malformed(pattern):
        logger.warning("Ignoring malformed file pattern %r; it will match nothing", pattern)
        return None
    if pattern.endswith("/"):
        # everything below the directory; the prefix may itself be a glob
        return re.compile(translate(pattern + "*"))
    return re.compile(translate(pattern))


def path_matches(path: str, pattern: str) -> bool:
    """Return True if repository-relative *path* matches glob *pattern*.

    A trailing ``/`` matches everything below that directory, and the
    directory part may be a glob (``vendor/*/``). A pattern without ``/`` is
    also tried against the base name, so ``*.lock`` matches lock files
    anywhere in the tree.
    """
    compiled = _compile_glob(pattern)
    if compiled is None:
        return False
    if compiled.match(path):
        return True
    if "/" not in pattern:
        return compiled.match(posixpath.basename(path)) is not None
    return False
