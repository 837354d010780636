"""Rich terminal reporter."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from eolguard.findings.models import MIXED, CheckResult, FileReport


def _describe(report: FileReport) -> Text:
    if report.is_error:
        return Text("read error", style="bold red")
    if not report.violations:
        return Text("ok", style="green")
    parts = []
    for v in report.violations:
        parts.append("mixed line endings" if v == MIXED else f"violates {v} policy")
    return Text(", ".join(parts), style="bold yellow")


def _stat_text(report: FileReport) -> str:
    if report.is_error:
        return report.error or ""
    stat = str(report.stat) if report.stat is not None else ""
    return stat or "-"


def render(
    result: CheckResult,
    *,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print check results to stderr using Rich."""
    console = console or Console(stderr=True)
    rows = [r for r in result.reports if verbose or r.is_bad]

    if rows:
        table = Table(title="Line endings", title_style="bold", border_style="dim")
        table.add_column("File", style="magenta")
        table.add_column("EOL", style="cyan")
        table.add_column("Status")
        for report in rows:
            table.add_row(Text(report.name), Text(_stat_text(report)), _describe(report))
        console.print(table)

    if verbose and result.skipped_files:
        console.print(f"[dim]Skipped:[/dim] {escape(', '.join(result.skipped_files))}")

    if result.blocked:
        console.print(f"[bold red]{result.error_count} error(s)[/bold red]")
    elif verbose:
        console.print(
            f"[bold green]✅ {result.checked_files} file(s) checked, line endings are clean.[/bold green]"
        )


def render_stats(reports: list[FileReport], *, console: Optional[Console] = None) -> None:
    """Print ``name: stat`` lines, one per file."""
    console = console or Console()
    for report in reports:
        console.print(
            f"{report.name}: {_stat_text(report)}", markup=False, highlight=False, soft_wrap=True
        )
