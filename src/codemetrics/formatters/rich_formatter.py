"""Rich terminal formatter for codemetrics."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import MetricsConfiguration
from .base import BaseFormatter, FileReport

console = Console()


def _complexity_label(complexity: int, config: MetricsConfiguration) -> str:
    if complexity >= config.complexity_level_extreme:
        return f"[red bold]{complexity}[/red bold]"
    elif complexity >= config.complexity_level_high:
        return f"[red]{complexity}[/red]"
    elif complexity >= config.complexity_level_normal:
        return f"[yellow]{complexity}[/yellow]"
    else:
        return f"[green]{complexity}[/green]"


class RichFormatter(BaseFormatter):
    """One table per analyzed file, followed by a summary line."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, reports: List[FileReport], config: MetricsConfiguration) -> None:
        for report in reports:
            self._print_report(report, config)
        self._print_summary(reports)

    def format(self, reports: List[FileReport], config: MetricsConfiguration) -> str:
        # Rich output goes directly to console; return empty string
        self.render(reports, config)
        return ""

    def _print_report(self, report: FileReport, config: MetricsConfiguration) -> None:
        if report.error is not None:
            console.print(f"[red]✗[/red] {escape(report.uri)}: {escape(report.error)}")
            return
        if not report.models:
            if self.verbose:
                console.print(f"[dim]{report.uri}: nothing above threshold[/dim]")
            return

        table = Table(title=report.uri, title_justify="left", show_lines=False)
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Complexity", justify="right")
        table.add_column("Message")

        for model in report.models:
            position = report.document.position_at(model.start)
            complexity = model.get_collected_complexity()
            table.add_row(
                str(position.line + 1),
                escape(model.text),
                _complexity_label(complexity, config),
                escape(model.to_string(config)),
            )
            if self.verbose:
                for line in model.get_explanation().splitlines():
                    table.add_row("", "", "", f"[dim]{line}[/dim]")
        console.print(table)

    def _print_summary(self, reports: List[FileReport]) -> None:
        failed = sum(1 for r in reports if r.error is not None)
        nodes = sum(len(r.models) for r in reports)
        summary = f"[bold]{len(reports)}[/bold] file(s), [bold]{nodes}[/bold] complex unit(s)"
        if failed:
            summary += f", [red]{failed} failed[/red]"
        console.print(summary)
