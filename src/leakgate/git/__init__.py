"""Git interface layer — adapter, diff parsing, models."""

from leakgate.git.adapter import (
    GitError,
    get_repo_root,
    history_additions,
    list_tracked_files,
    range_additions,
    staged_additions,
    tree_additions,
    validate_git_executable,
)
from leakgate.git.diff_parser import DiffParser, collect_additions
from leakgate.git.models import (
    Addition,
    CommitContext,
    DiffFile,
    DiffLine,
    FileSkipped,
    FileStatus,
    LineType,
    path_matches,
)

__all__ = [
    "Addition",
    "CommitContext",
    "DiffFile",
    "DiffLine",
    "DiffParser",
    "FileSkipped",
    "FileStatus",
    "GitError",
    "LineType",
    "collect_additions",
    "get_repo_root",
    "history_additions",
    "list_tracked_files",
    "path_matches",
    "range_additions",
    "staged_additions",
    "tree_additions",
    "validate_git_executable",
]
