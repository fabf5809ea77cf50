"""Git subprocess wrapper — diffs, history walking, blobs, and Addition producers."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from leakgate.git.diff_parser import ParsedDiff, collect_additions
from leakgate.git.models import Addition, CommitContext

logger = logging.getLogger(__name__)

_DIFF_FLAGS = ["--unified=0", "--no-color", "--no-ext-diff"]
_LOG_FORMAT = "%H%x00%an%x00%aI%x00%s"
_GITLINK_MODE = "160000"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git_bytes(args: list[str], cwd: Path, timeout: int = 60) -> bytes:
    """Run a git command and return raw stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(f"git {args[0]} failed: {stderr or f'exit status {result.returncode}'}")
    return result.stdout


def _run_git(args: list[str], cwd: Path, timeout: int = 60) -> str:
    return _run_git_bytes(args, cwd, timeout).decode("utf-8", errors="replace")


def validate_git_executable(cwd: Path, os_name: str) -> None:
    """Refuse to run when a git executable is planted in the repository (Windows).

    Windows resolves executables from the current directory before PATH, so a
    ``git.exe`` committed to the repository would run instead of the real git.
    """
    if os_name != "windows":
        return
    extensions = os.environ.get("PATHEXT", ".EXE").split(";")
    for ext in extensions:
        candidate = f"git{ext.lower()}"
        if (cwd / candidate).exists():
            raise GitError(f"not allowed to have git executable located in repository: {candidate}")


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_staged_diff(repo_root: Path) -> str:
    """Return the unified diff of staged changes (--cached)."""
    return _run_git(["diff", "--cached", *_DIFF_FLAGS], cwd=repo_root)


def get_range_diff(repo_root: Path, base: str, head: str) -> str:
    """Return the unified diff between two revisions."""
    return _run_git(["diff", f"{base}..{head}", *_DIFF_FLAGS], cwd=repo_root)


def list_commits(repo_root: Path, rev: str = "HEAD") -> List[str]:
    """Return every commit reachable from *rev*, oldest first.

    An empty repository (no commits yet) yields an empty list.
    """
    try:
        _run_git(["rev-parse", "--verify", "--quiet", rev], cwd=repo_root)
    except GitError:
        return []
    out = _run_git(["rev-list", "--reverse", rev], cwd=repo_root)
    return [line for line in out.splitlines() if line.strip()]


def get_commit_context(repo_root: Path, sha: str) -> CommitContext:
    out = _run_git(["show", "-s", f"--format={_LOG_FORMAT}", sha], cwd=repo_root).strip()
    parts = out.split("\x00")
    if len(parts) != 4:
        return CommitContext(sha=sha)
    return CommitContext(sha=parts[0], author=parts[1], date=parts[2], subject=parts[3])


def _first_parent(repo_root: Path, sha: str) -> Optional[str]:
    out = _run_git(["rev-list", "--parents", "-n", "1", sha], cwd=repo_root).split()
    return out[1] if len(out) > 1 else None


def get_commit_diff(repo_root: Path, sha: str) -> str:
    """Return the diff a commit introduced relative to its first parent.

    Merges are diffed against their first parent too, so content a merge
    brings in (conflict resolutions, files added during the merge) is
    scanned. A root commit diffs against the empty tree.
    """
    parent = _first_parent(repo_root, sha)
    if parent is None:
        return _run_git(["diff-tree", "-r", "-p", "--root", "--no-commit-id", *_DIFF_FLAGS, sha], cwd=repo_root)
    return _run_git(["diff-tree", "-r", "-p", "--no-commit-id", *_DIFF_FLAGS, parent, sha], cwd=repo_root)


def read_blob(repo_root: Path, rev: str, path: str) -> bytes:
    """Return the bytes of *path* at *rev*; rev ``""`` reads the index."""
    return _run_git_bytes(["cat-file", "blob", f"{rev}:{path}"], cwd=repo_root)


def list_tracked_files(repo_root: Path, rev: Optional[str] = None) -> List[str]:
    """Return the file paths in the index, or in the tree of *rev*.

    Submodule entries are left out; they have no blob to read.
    """
    if rev is None:
        # "<mode> <sha> <stage>\t<path>"
        output = _run_git(["ls-files", "-s", "-z"], cwd=repo_root)
    else:
        # "<mode> <type> <sha>\t<path>"
        output = _run_git(["ls-tree", "-r", "-z", rev], cwd=repo_root)
    paths: List[str] = []
    for entry in output.split("\x00"):
        if not entry:
            continue
        meta, _, path = entry.partition("\t")
        fields = meta.split(" ")
        if fields[0] == _GITLINK_MODE:
            continue
        if rev is None and fields[-1] != "0":
            # unmerged entry; there is no single staged blob to read
            logger.debug("Skipping unmerged %s", path)
            continue
        paths.append(path)
    return paths


# ── Addition producers ────────────────────────────────────────────────────────


def _with_binaries(
    repo_root: Path,
    parsed: ParsedDiff,
    rev: str,
    commit: Optional[CommitContext] = None,
) -> List[Addition]:
    """Append binary files, read whole from *rev*, to the text additions."""
    additions = list(parsed.additions)
    for path in parsed.binary_paths:
        content = read_blob(repo_root, rev, path)
        additions.append(Addition(path=path, content=content, commit=commit))
    for skipped in parsed.skipped:
        logger.debug("Skipping %s (%s)", skipped.path, skipped.reason)
    return additions


def staged_additions(repo_root: Path) -> List[Addition]:
    """Additions staged for the next commit."""
    parsed = collect_additions(get_staged_diff(repo_root))
    return _with_binaries(repo_root, parsed, rev="")


def range_additions(repo_root: Path, base: str, head: str = "HEAD") -> List[Addition]:
    """Additions introduced between *base* and *head*, as one change."""
    parsed = collect_additions(get_range_diff(repo_root, base, head))
    return _with_binaries(repo_root, parsed, rev=head)


def tree_additions(repo_root: Path, rev: Optional[str] = None) -> List[Addition]:
    """Every tracked file, whole, as staged in the index or as committed at *rev*.

    The working tree is never read, so what is scanned is what gets committed.
    """
    blob_rev = "" if rev is None else rev
    return [
        Addition(path=path, content=read_blob(repo_root, blob_rev, path))
        for path in list_tracked_files(repo_root, rev)
    ]


def history_additions(repo_root: Path, rev: str = "HEAD") -> Iterator[Tuple[CommitContext, List[Addition]]]:
    """Yield ``(commit, additions)`` for every commit from the root to *rev*.

    Lazy: each commit's diff is only read when the consumer asks for it.
    """
    commits = list_commits(repo_root, rev)
    logger.info("Walking %d commit(s) of history", len(commits))
    for sha in commits:
        context = get_commit_context(repo_root, sha)
        parsed = collect_additions(get_commit_diff(repo_root, sha), commit=context)
        yield context, _with_binaries(repo_root, parsed, rev=sha, commit=context)
