"""
Display management for the newmusic CLI with Rich components.
"""

from typing import Optional

from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.report import RenderedRelease, RunReport
from ..services.record_auditor import AuditReport


class DisplayManager:
    """Renders run and audit reports to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def create_header_panel(self, title: str, subtitle: Optional[str] = None) -> Panel:
        """Create a styled header panel."""
        header_text = Text(title, style="bold cyan")
        if subtitle:
            header_text.append(f"\n{subtitle}", style="dim")
        return Panel(
            Align.center(header_text),
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2)
        )

    def display_run_report(self, report: RunReport):
        """Display the releases on the card and the rows that were left out."""
        window = report.window
        self.console.print()
        self.console.print(self.create_header_panel(
            "NEW RELEASES",
            f"{window.start.isoformat()} to {window.end.isoformat()}"
        ))

        if report.is_noop:
            self.console.print("[bold yellow]⚠[/bold yellow] No releases found for the previous week.")
            self._display_skipped_rows(report)
            return

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="blue",
        )
        table.add_column("#", style="bold white", width=4, justify="center")
        table.add_column("Release", style="white")
        table.add_column("Type", style="magenta", justify="center")
        table.add_column("Release Date", style="cyan", justify="center")
        table.add_column("Status", justify="center")

        for i, outcome in enumerate(report.card.outcomes, 1):
            release = outcome.release
            if isinstance(outcome, RenderedRelease):
                status = Text("clipped", style="bold yellow") if outcome.clipped else Text("drawn", style="bold green")
            else:
                status = Text(f"skipped: {outcome.reason}", style="bold red")
            table.add_row(str(i), release.display_name, release.release_type, release.release_date_text, status)

        self.console.print(table)
        self._display_skipped_rows(report)

        summary = (
            f"[bold green]✓[/bold green] Card written: [green]{report.card.path or report.card.file_name}[/green]\n"
            f"[dim blue]ℹ[/dim blue] [dim]{len(report.card.rendered)} drawn, "
            f"{len(report.card.skipped)} skipped, {len(report.skipped_rows)} catalog row(s) rejected[/dim]"
        )
        self.console.print(Panel(summary, border_style="cyan", box=box.ROUNDED, padding=(1, 2)))

    def _display_skipped_rows(self, report: RunReport):
        for row in report.skipped_rows:
            self.console.print(f"[dim yellow]⚠[/dim yellow] [dim]Line {row.line}: {row.reason.value} ({row.detail})[/dim]")

    def display_audit_report(self, report: AuditReport):
        """Display catalog audit results."""
        if report.ok:
            self.console.print(f"[bold green]✓[/bold green] Catalog validation passed ({report.rows_checked} rows).")
        else:
            self.console.print("[bold red]✗[/bold red] Catalog validation errors:")
            for message in report.messages():
                self.console.print(f"  [red]{message}[/red]")

        for line, value in sorted(report.type_fixes.items()):
            self.console.print(f"[dim blue]ℹ[/dim blue] [dim]Line {line}: type would normalize to {value!r}[/dim]")
