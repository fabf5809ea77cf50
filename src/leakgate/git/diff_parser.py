"""Unified diff parser.

Turns ``git diff --unified=0`` output into DiffFile / DiffLine / FileSkipped
items, then groups the added lines of every file into one Addition. Handles
BOMs, CRLF, binary markers, renames, mode-only changes, submodule pointers
and "No newline at end of file" markers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from leakgate.git.models import (
    Addition,
    CommitContext,
    DiffFile,
    DiffLine,
    FileSkipped,
    FileStatus,
    LineType,
)

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")
_BINARY_RE = re.compile(r"^Binary files .* and (?:b/)?(.*) differ$")
_RENAME_FROM_RE = re.compile(r"^rename from (.+)$")
_RENAME_TO_RE = re.compile(r"^rename to (.+)$")
_SUBPROJECT_RE = re.compile(r"^[+-]?Subproject commit [0-9a-f]+$")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")
_FILE_HEADER_RE = re.compile(r"^(?:--- (?:a/|/dev/null)|\+\+\+ (?:b/|/dev/null))")
_SKIPPABLE_SUBHEADERS = (
    re.compile(r"^index [0-9a-f]+\.\.[0-9a-f]+"),
    re.compile(r"^similarity index \d+%$"),
    re.compile(r"^dissimilarity index \d+%$"),
    re.compile(r"^new mode \d+$"),
    re.compile(r"^copy (?:from|to) .+$"),
    _FILE_HEADER_RE,
)
_OLD_MODE_RE = re.compile(r"^old mode \d+$")
_DELETED_FILE_RE = re.compile(r"^deleted file mode \d+$")
_NEW_FILE_RE = re.compile(r"^new file mode \d+$")

DiffItem = Union[DiffLine, DiffFile, FileSkipped]


@dataclass
class _FileHeader:
    path: str
    old_path: str
    renamed: bool = False
    mode_changed: bool = False
    deleted: bool = False
    created: bool = False
    binary: bool = False


class DiffParser:
    """Parse unified diff text and yield DiffFile, DiffLine and FileSkipped items.

    Usage::

        for item in DiffParser(diff_text).parse():
            if isinstance(item, DiffLine):
                ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = diff_text.splitlines()

    def parse(self) -> Iterator[DiffItem]:
        idx = 0
        total = len(self._lines)
        current_file: Optional[str] = None
        line_no = 0

        while idx < total:
            raw_line = self._lines[idx]

            m = _DIFF_HEADER_RE.match(raw_line)
            if m:
                header, idx = self._read_file_header(m.group(1), m.group(2), idx + 1)
                current_file = None
                if header.deleted:
                    yield DiffFile(path=header.path, status=FileStatus.DELETED)
                    continue
                if header.binary:
                    yield FileSkipped(path=header.path, reason="binary")
                    continue
                if header.mode_changed and not self._has_hunks_ahead(idx):
                    yield FileSkipped(path=header.path, reason="mode_only")
                    continue
                if header.created:
                    status = FileStatus.ADDED
                elif header.renamed:
                    status = FileStatus.RENAMED
                else:
                    status = FileStatus.MODIFIED
                current_file = header.path
                yield DiffFile(
                    path=header.path,
                    old_path=header.old_path if header.renamed else None,
                    status=status,
                )
                continue

            hm = _HUNK_HEADER_RE.match(raw_line)
            if hm:
                line_no = int(hm.group(1))
                idx += 1
                continue

            if _SUBPROJECT_RE.match(raw_line) or _NO_NEWLINE_RE.match(raw_line):
                idx += 1
                continue

            if current_file is not None:
                if raw_line.startswith("+"):
                    yield DiffLine(
                        file=current_file,
                        line_no=line_no,
                        content=raw_line[1:].lstrip("\ufeff").rstrip("\r"),
                        line_type=LineType.ADDED,
                    )
                    line_no += 1
                elif raw_line.startswith(" "):
                    line_no += 1
            idx += 1

    def _read_file_header(self, old_path: str, new_path: str, idx: int) -> tuple[_FileHeader, int]:
        """Consume the extended header lines that follow ``diff --git``."""
        header = _FileHeader(path=new_path, old_path=old_path)
        while idx < len(self._lines):
            sub = self._lines[idx]
            if any(p.match(sub) for p in _SKIPPABLE_SUBHEADERS):
                pass
            elif _OLD_MODE_RE.match(sub):
                header.mode_changed = True
            elif _DELETED_FILE_RE.match(sub):
                header.deleted = True
            elif _NEW_FILE_RE.match(sub):
                header.created = True
            elif (rm := _RENAME_FROM_RE.match(sub)):
                header.old_path = rm.group(1)
                header.renamed = True
            elif (rt := _RENAME_TO_RE.match(sub)):
                header.path = rt.group(1)
            elif _BINARY_RE.match(sub):
                header.binary = True
            else:
                break
            idx += 1
        return header, idx

    def _has_hunks_ahead(self, idx: int) -> bool:
        while idx < len(self._lines):
            line = self._lines[idx]
            if _DIFF_HEADER_RE.match(line):
                return False
            if _HUNK_HEADER_RE.match(line):
                return True
            idx += 1
        return False


@dataclass
class ParsedDiff:
    """Additions built from one diff, plus the files that need special handling."""

    additions: List[Addition] = field(default_factory=list)
    binary_paths: List[str] = field(default_factory=list)
    skipped: List[FileSkipped] = field(default_factory=list)


def collect_additions(diff_text: str, commit: Optional[CommitContext] = None) -> ParsedDiff:
    """Group the added lines of *diff_text* into one Addition per file.

    Files without added lines (deletions, pure renames) produce no Addition.
    Binary files are reported in ``binary_paths`` so the caller can read the
    blob; the text diff does not carry their bytes.
    """
    lines_by_file: Dict[str, List[str]] = {}
    parsed = ParsedDiff()

    for item in DiffParser(diff_text).parse():
        if isinstance(item, FileSkipped):
            if item.reason == "binary":
                parsed.binary_paths.append(item.path)
            else:
                parsed.skipped.append(item)
        elif isinstance(item, DiffLine):
            lines_by_file.setdefault(item.file, []).append(item.content)

    for path, lines in lines_by_file.items():
        content = ("\n".join(lines) + "\n").encode("utf-8", errors="surrogateescape")
        parsed.additions.append(Addition(path=path, content=content, commit=commit))
    return parsed
