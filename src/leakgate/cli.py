"""leakgate CLI — Typer application with scan, audit, checksum, install, and init commands."""

from __future__ import annotations

import platform
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple

import typer
from rich.console import Console

from leakgate import __version__
from leakgate.config.loader import ConfigError, load_settings
from leakgate.config.schema import OUTPUT_FORMATS, LeakgateSettings
from leakgate.config.talismanrc import TalismanRC, load_talismanrc
from leakgate.git.adapter import GitError, get_repo_root, validate_git_executable
from leakgate.log import setup_logging
from leakgate.scanner.engine import ScanError, Scanner
from leakgate.scanner.models import ScanMode

app = typer.Typer(
    name="leakgate",
    help="Keep secrets out of git: gate what you commit, audit what you already did.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    try:
        repo_root = get_repo_root()
        validate_git_executable(repo_root, platform.system().lower())
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return repo_root


def _prepare(
    repo_root: Path,
    *,
    config: Optional[str],
    rc: Optional[str],
    log_level: Optional[str],
    debug: bool,
) -> Tuple[LeakgateSettings, TalismanRC]:
    """Load settings, set up logging, then load .talismanrc. Exit 2 on config errors."""
    try:
        settings = load_settings(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    setup_logging(log_level or settings.logging.level, debug)

    try:
        talisman_rc = load_talismanrc(repo_root, rc)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return settings, talisman_rc


def _apply_overrides(
    settings: LeakgateSettings,
    *,
    format: Optional[str],
    workers: Optional[int],
    timeout: Optional[float],
) -> None:
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        settings.output.format = format  # type: ignore[assignment]
    if workers is not None:
        settings.scan.workers = max(1, workers)
    if timeout is not None:
        settings.scan.timeout = timeout


def _run(
    mode: ScanMode,
    collect: Callable[[], Iterable[Any]],
    *,
    repo_root: Path,
    settings: LeakgateSettings,
    talisman_rc: TalismanRC,
    output: Optional[str],
    content_rev: Optional[str] = None,
) -> None:
    """Run one scan, report it, and exit with its exit code."""
    from leakgate.output import json_report, terminal

    scanner = Scanner(
        mode,
        talisman_rc,
        workers=settings.scan.workers,
        timeout=settings.scan.timeout,
        repo_root=repo_root,
        content_rev=content_rev,
        max_file_size=settings.scan.max_file_size_kb * 1024,
    )

    try:
        outcome = scanner.run(collect())
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except KeyboardInterrupt:
        console.print("[bold yellow]Interrupted.[/bold yellow]")
        raise typer.Exit(code=2)

    # suggestions come from the scan's own calculator so they match what was evaluated
    suggestion: Optional[str] = None
    if mode is ScanMode.CURRENT and scanner.calculator is not None and outcome.results.has_findings():
        suggestion = scanner.calculator.suggest_talismanrc(outcome.results.paths())

    report_text: Optional[str] = None
    if settings.output.format == "json":
        report_text = json_report.render(outcome, suggestion=suggestion)
        print(report_text)
    else:
        terminal.render(outcome, suggestion=suggestion, show_summary=settings.output.show_summary)

    if output:
        Path(output).write_text(report_text or json_report.render(outcome, suggestion=suggestion), encoding="utf-8")

    raise typer.Exit(code=outcome.exit_code)


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    from_ref: Optional[str] = typer.Option(None, "--from", help="Base revision of a range to scan"),
    to_ref: Optional[str] = typer.Option(
        None, "--to", help="Head revision of the range (default HEAD), or the tree scanned by --all-files"
    ),
    all_files: bool = typer.Option(False, "--all-files", help="Scan every tracked file instead of staged changes"),
    rc: Optional[str] = typer.Option(None, "--rc", help="Path to .talismanrc"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .leakgate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write a JSON report to file"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker threads"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Give up after this many seconds"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="error | warn | info | debug"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Scan staged changes (or a commit range, or the whole tree) for secrets."""
    from leakgate.git.adapter import range_additions, staged_additions, tree_additions

    if from_ref and all_files:
        console.print("[bold red]Error:[/bold red] --from and --all-files cannot be combined")
        raise typer.Exit(code=2)
    if to_ref and not (from_ref or all_files):
        console.print("[bold red]Error:[/bold red] --to needs --from or --all-files")
        raise typer.Exit(code=2)

    repo_root = _resolve_repo_root()
    settings, talisman_rc = _prepare(repo_root, config=config, rc=rc, log_level=log_level, debug=debug)
    _apply_overrides(settings, format=format, workers=workers, timeout=timeout)

    # checksums are taken from the content being scanned, never the working tree
    collect: Callable[[], Iterable[Any]]
    content_rev: Optional[str]
    if from_ref:
        head = to_ref or "HEAD"
        collect = partial(range_additions, repo_root, from_ref, head)
        content_rev = head
    elif all_files:
        collect = partial(tree_additions, repo_root, to_ref)
        content_rev = None
    else:
        collect = partial(staged_additions, repo_root)
        content_rev = ""

    _run(
        ScanMode.CURRENT,
        collect,
        repo_root=repo_root,
        settings=settings,
        talisman_rc=talisman_rc,
        output=output,
        content_rev=content_rev,
    )


# ── audit ─────────────────────────────────────────────────────────────────────


@app.command()
def audit(
    rev: str = typer.Option("HEAD", "--rev", help="Walk history reachable from this revision"),
    rc: Optional[str] = typer.Option(None, "--rc", help="Path to .talismanrc (custom_patterns only)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .leakgate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write a JSON report to file"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker threads"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Give up after this many seconds"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="error | warn | info | debug"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Scan every commit in history. Nothing in .talismanrc suppresses findings here."""
    from leakgate.git.adapter import history_additions

    repo_root = _resolve_repo_root()
    settings, talisman_rc = _prepare(repo_root, config=config, rc=rc, log_level=log_level, debug=debug)
    _apply_overrides(settings, format=format, workers=workers, timeout=timeout)

    _run(
        ScanMode.HISTORY,
        partial(history_additions, repo_root, rev),
        repo_root=repo_root,
        settings=settings,
        talisman_rc=talisman_rc,
        output=output,
    )


# ── checksum ──────────────────────────────────────────────────────────────────


@app.command()
def checksum(
    patterns: List[str] = typer.Argument(..., help="File patterns to fingerprint, e.g. 'go.sum' or 'config/'"),
    rev: Optional[str] = typer.Option(None, "--rev", help="Fingerprint files at this revision instead of the index"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="error | warn | info | debug"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging"),
) -> None:
    """Print .talismanrc entries with the checksum of each pattern as staged."""
    from leakgate.scanner.checksum import ChecksumCalculator

    repo_root = _resolve_repo_root()
    setup_logging(log_level, debug)
    try:
        calculator = ChecksumCalculator.for_revision(repo_root, rev)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    for pattern in patterns:
        if not calculator.matching_paths(pattern):
            console.print(f"[yellow]⚠[/yellow]  No tracked files match {pattern!r}")
    print(calculator.suggest_talismanrc(patterns), end="")


# ── install ───────────────────────────────────────────────────────────────────


def _check_hook(hook: str) -> str:
    from leakgate.hooks.installer import HOOK_TYPES

    if hook not in HOOK_TYPES:
        console.print(f"[bold red]Invalid hook:[/bold red] {hook} (expected {' | '.join(HOOK_TYPES)})")
        raise typer.Exit(code=2)
    return hook


@app.command()
def install(
    hook: str = typer.Option("pre-commit", "--hook", help="pre-commit | pre-push"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing hook"),
) -> None:
    """Install leakgate as a git hook."""
    from leakgate.hooks.installer import install_hook

    hook = _check_hook(hook)
    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, hook, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall(
    hook: str = typer.Option("pre-commit", "--hook", help="pre-commit | pre-push"),
) -> None:
    """Remove a leakgate git hook."""
    from leakgate.hooks.installer import uninstall_hook

    hook = _check_hook(hook)
    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root, hook)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .leakgate.toml and .talismanrc in the repo root."""
    from leakgate.config.defaults import DEFAULT_SETTINGS_TOML, DEFAULT_TALISMANRC
    from leakgate.config.loader import SETTINGS_FILENAME
    from leakgate.config.talismanrc import TALISMANRC_FILENAME

    repo_root = _resolve_repo_root()
    created = 0
    for name, template in ((SETTINGS_FILENAME, DEFAULT_SETTINGS_TOML), (TALISMANRC_FILENAME, DEFAULT_TALISMANRC)):
        path = repo_root / name
        if path.exists():
            console.print(f"[yellow]⚠[/yellow]  {name} already exists at {path}")
            continue
        path.write_text(template, encoding="utf-8")
        console.print(f"[green]✓[/green] Created {path}")
        created += 1

    if not created:
        raise typer.Exit(code=1)


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"leakgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """leakgate — keep secrets out of git, now and in history."""
