"""CLI progress display using rich."""

import time
from contextlib import contextmanager
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from ..domain.models import DayReport, RunResult


class ModernCLI:
    """Minimalistic CLI interface with rich formatting."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.start_time: Optional[float] = None

    def _format_hours(self, seconds: int) -> str:
        """Format seconds as a Toggl-style duration (e.g., 2h 30m)."""
        if seconds == 0:
            return "0m"

        hours, rest = divmod(seconds, 3600)
        minutes = rest // 60

        if hours == 0:
            return f"{minutes}m"
        elif minutes == 0:
            return f"{hours}h"
        else:
            return f"{hours}h {minutes}m"

    def show_banner(self) -> None:
        """Show application banner."""
        banner = Text("togglbill", style="bold blue")
        banner.append(" • Toggl billing reconciliation", style="dim")
        self.console.print(Panel(banner, border_style="blue"))

    def validate_config(self, errors: List[str]) -> bool:
        """Show configuration validation results."""
        if errors:
            self.console.print("❌ [red bold]Configuration Error[/red bold]")
            for error in errors:
                self.console.print(f"   • {escape(error)}", style="red")
            return False
        self.console.print("✅ [green]Configuration validated[/green]")
        return True

    def start_run(self, time_range: str, dry_run: bool = False) -> None:
        """Start reconciliation display."""
        self.start_time = time.time()

        mode_text = "[yellow]DRY RUN[/yellow]" if dry_run else "[blue]Reconciling[/blue]"
        self.console.print(f"\n⏳ {mode_text} [cyan]{time_range}[/cyan]...")

    def show_days(self, reports: List[DayReport]) -> None:
        """Show per-day billable figures and operation counts."""
        if not reports:
            return

        table = Table(show_header=True, box=None)
        table.add_column("Day", style="cyan")
        table.add_column("Entries", justify="right")
        table.add_column("Billable", justify="right", style="green")
        table.add_column("Non-billable", justify="right", style="dim")
        table.add_column("Break budget", justify="right", style="blue")
        table.add_column("Changes", justify="right")

        for report in reports:
            changes = len(report.operations)
            table.add_row(
                report.day.isoformat(),
                str(len(report.entries)),
                self._format_hours(report.billable),
                self._format_hours(report.non_billable),
                self._format_hours(report.break_budget),
                Text(str(changes), style="yellow" if changes else "green"),
            )

        self.console.print(table)

    def show_operation_count(self, count: int) -> None:
        self.console.print(f"created {count} mods")

    def show_operations(self, serialized: str) -> None:
        """Print the serialized operation list verbatim."""
        self.console.print(serialized, markup=False, highlight=False, soft_wrap=True)

    def complete_run(self, time_range: str, result: RunResult) -> None:
        """Show run completion summary."""
        duration = 0.0 if self.start_time is None else time.time() - self.start_time

        changes = len(result.operations)
        if changes == 0:
            changes_text = "[green]up-to-date[/green]"
        elif result.dry_run:
            changes_text = f"[yellow]{changes} changes[/yellow]"
        else:
            changes_text = f"[yellow]{result.applied}/{changes} applied[/yellow]"

        status_icon = "🔍" if result.dry_run else "✅"
        summary = (
            f"{status_icon} [green bold]{duration:.2f}s[/green bold] • "
            f"[cyan]{time_range}[/cyan] • "
            f"[white]{result.total_entries} entries[/white] • "
            f"{changes_text}"
        )
        self.console.print(Panel(summary, border_style="green", title="Summary"))

    def show_error(self, error: str) -> None:
        """Show error message."""
        self.console.print(f"\n❌ [red bold]Error:[/red bold] {escape(error)}")

    @contextmanager
    def progress_spinner(self, description: str):
        """Context manager for showing a spinner with description."""
        with Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task(description, total=None)
            try:
                yield progress
            finally:
                progress.remove_task(task)
