"""Rich terminal reporter — findings grouped by path, severity pills, suggested .talismanrc."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from leakgate.scanner.models import ScanMode, ScanOutcome, ScanStatus

_SEVERITY_STYLE = {
    "critical": "bold white on red",
    "high": "bold white on dark_orange",
    "medium": "bold black on yellow",
    "low": "bold black on bright_cyan",
}

_SEVERITY_ICON = {
    "critical": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🔵",
}


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, "")
    icon = _SEVERITY_ICON.get(severity, "")
    return Text(f" {icon} {severity.upper()} ", style=style)


def _findings_table(outcome: ScanOutcome) -> Table:
    history = outcome.mode is ScanMode.HISTORY
    table = Table(
        title="leakgate findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("File", style="magenta")
    if history:
        table.add_column("Commit", style="green")
    table.add_column("Severity", justify="center", width=12)
    table.add_column("Detector", style="cyan")
    table.add_column("Finding", min_width=30)

    results = outcome.results
    for path, findings in results.grouped().items():
        for i, finding in enumerate(findings):
            row = [path if i == 0 else ""]
            if history:
                row.append(finding.commit.short_sha if finding.commit else "-")
            message = Text(finding.message)
            if not results.is_failure(finding):
                message.append("  (below threshold)", style="dim")
            row.extend([_severity_pill(finding.severity), finding.detector_name, message])
            table.add_row(*row)
    return table


def render(
    outcome: ScanOutcome,
    *,
    suggestion: Optional[str] = None,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print a scan outcome to the terminal using Rich."""
    console = console or Console(stderr=True)
    results = outcome.results

    console.print()
    if results.has_findings():
        console.print(_findings_table(outcome))
    elif not outcome.incomplete:
        console.print("[bold green]✅ No secrets detected.[/bold green]")

    if suggestion:
        console.print()
        console.print(
            "If you are absolutely sure these files hold no secrets, "
            "add the following to .talismanrc:"
        )
        console.print(Syntax(suggestion, "yaml", theme="ansi_dark", background_color="default"))

    if show_summary:
        _print_summary(console, outcome)

    console.print()
    status = outcome.status
    if status is ScanStatus.INCOMPLETE:
        console.print("[bold yellow]⚠️  Scan did not finish; results are incomplete.[/bold yellow]")
    elif status is ScanStatus.FLAGGED:
        console.print("[bold red]❌ BLOCKED — potential secrets detected.[/bold red]")


def _print_summary(console: Console, outcome: ScanOutcome) -> None:
    results = outcome.results
    console.print()
    console.print(f"[dim]Mode:[/dim]          {outcome.mode.value}")
    console.print(f"[dim]Scanned:[/dim]       {outcome.scanned}")
    console.print(f"[dim]Skipped:[/dim]       {len(outcome.skipped)}")
    console.print(f"[dim]Findings:[/dim]      {len(results)}")
    console.print(f"[dim]Above threshold:[/dim] {len(results.failures())}")
    console.print(f"[dim]Duration:[/dim]      {outcome.duration_ms:.0f}ms")
