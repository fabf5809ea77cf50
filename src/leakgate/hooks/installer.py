"""Git hook installer — leakgate install / uninstall."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

HOOK_TYPES = ("pre-commit", "pre-push")

_HOOK_MARKER = "# leakgate-hook"

_PRE_COMMIT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Installed by leakgate. To uninstall: leakgate uninstall --hook pre-commit

exec leakgate scan
"""

# git feeds "<local ref> <local sha> <remote ref> <remote sha>" lines on stdin
_PRE_PUSH = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Installed by leakgate. To uninstall: leakgate uninstall --hook pre-push

z40=0000000000000000000000000000000000000000
status=0
while read local_ref local_sha remote_ref remote_sha; do
  if [ "$local_sha" = "$z40" ]; then
    continue
  fi
  if [ "$remote_sha" = "$z40" ]; then
    leakgate scan --all-files --to "$local_sha" || status=$?
  else
    leakgate scan --from "$remote_sha" --to "$local_sha" || status=$?
  fi
done
exit $status
"""

_SCRIPTS: Dict[str, str] = {
    "pre-commit": _PRE_COMMIT,
    "pre-push": _PRE_PUSH,
}


def _hooks_dir(repo_root: Path) -> Path:
    return repo_root / ".git" / "hooks"


def _check_hook_type(hook: str) -> None:
    if hook not in _SCRIPTS:
        raise ValueError(f"Unsupported hook {hook!r}; expected one of {', '.join(HOOK_TYPES)}")


def install_hook(repo_root: Path, hook: str = "pre-commit", *, force: bool = False) -> Tuple[bool, str]:
    """Install leakgate as *hook*.

    Returns (success, message).
    """
    _check_hook_type(hook)
    hooks_dir = _hooks_dir(repo_root)
    if not hooks_dir.parent.is_dir():
        return False, f"Not a git repository: {repo_root}"

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / hook

    if hook_path.exists():
        content = hook_path.read_text(encoding="utf-8", errors="replace")
        if _HOOK_MARKER in content:
            return True, f"leakgate {hook} hook is already installed."
        if not force:
            return (
                False,
                f"A {hook} hook already exists at {hook_path}. "
                "Use --force to overwrite, or manually add 'leakgate scan' to it.",
            )

    hook_path.write_text(_SCRIPTS[hook], encoding="utf-8")
    try:
        hook_path.chmod(0o755)
    except OSError:
        pass  # Windows doesn't need chmod

    return True, f"Installed leakgate {hook} hook at {hook_path}"


def uninstall_hook(repo_root: Path, hook: str = "pre-commit") -> Tuple[bool, str]:
    """Remove a leakgate-installed *hook*.

    Returns (success, message).
    """
    _check_hook_type(hook)
    hook_path = _hooks_dir(repo_root) / hook

    if not hook_path.exists():
        return True, f"No {hook} hook found — nothing to remove."

    content = hook_path.read_text(encoding="utf-8", errors="replace")
    if _HOOK_MARKER not in content:
        return False, f"{hook} hook exists but was not installed by leakgate."

    hook_path.unlink()
    return True, f"Removed leakgate {hook} hook from {hook_path}"
