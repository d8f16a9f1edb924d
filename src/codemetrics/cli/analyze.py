"""Analyze command: score files and print their complex units."""

from pathlib import Path
from typing import List, Optional

import click
import typer

from ..config import MetricsConfiguration
from ..core import DiagnosticsCollector, MetricsAnalyzer
from ..document import TextDocument
from ..exceptions import CodeMetricsError
from ..formatters import FileReport, JsonFormatter, RichFormatter
from ..languages import supported_language_ids
from ..logging_config import setup_logging
from . import app
from ._common import console, iter_source_files, resolve_config


@app.command()
def analyze(
    paths: List[Path] = typer.Argument(
        ...,
        help="Files or directories to analyze",
        exists=True,
        readable=True,
    ),
    language: Optional[str] = typer.Option(
        None,
        "-l",
        "--language",
        help="Force a language id instead of detecting it from the extension",
        click_type=click.Choice(supported_language_ids()),
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "-t",
        "--threshold",
        help="Minimum complexity a unit needs to be reported",
        min=0,
    ),
    diagnostics: Optional[bool] = typer.Option(
        None,
        "--diagnostics/--no-diagnostics",
        help="Produce editor diagnostics for reported units",
    ),
    fail_on: Optional[str] = typer.Option(
        None,
        "--fail-on",
        help="Exit 1 if a unit reaches a level: any | high | extreme",
        click_type=click.Choice(["any", "high", "extreme"], case_sensitive=False),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logs and a cost breakdown per unit",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
):
    """
    Score every function, method and class and list the complex ones.

    [bold cyan]Examples:[/bold cyan]

      codemetrics analyze src/

      codemetrics analyze app.vue --diagnostics --json

      codemetrics analyze src/ --threshold 10 --fail-on high
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, threshold=threshold, diagnostics=diagnostics)
    except CodeMetricsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    publisher = DiagnosticsCollector()
    analyzer = MetricsAnalyzer(settings, publisher)
    reports: List[FileReport] = []

    try:
        for path in iter_source_files(paths, settings, language):
            reports.append(_analyze_file(path, language, analyzer, publisher, logger))
    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)

    if json_output:
        JsonFormatter().render(reports, settings)
    else:
        RichFormatter(verbose=verbose).render(reports, settings)

    failed = any(r.error is not None for r in reports)
    if fail_on is not None and _check_fail_condition(fail_on, reports, settings):
        failed = True
    if failed:
        raise typer.Exit(1)


def _analyze_file(
    path: Path,
    language: Optional[str],
    analyzer: MetricsAnalyzer,
    publisher: DiagnosticsCollector,
    logger,
) -> FileReport:
    """Analyze one file; failures are recorded on the report, never raised."""
    try:
        document = TextDocument.from_path(path, language_id=language)
    except CodeMetricsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return FileReport(
            document=TextDocument(uri=path.resolve().as_uri(), language_id=language or "", text=""),
            error=str(e),
        )

    try:
        models = analyzer.get_metrics(document)
    except CodeMetricsError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        return FileReport(document=document, error=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error analyzing {document.uri}")
        return FileReport(document=document, error=f"Unexpected error: {e}")

    return FileReport(
        document=document,
        models=models,
        diagnostics=publisher.get(document.uri) or [],
    )


def _check_fail_condition(
    fail_on: str, reports: List[FileReport], config: MetricsConfiguration
) -> bool:
    """Check if the fail-on condition is met."""
    fail_on = fail_on.lower()
    if fail_on == "any":
        floor = None
    elif fail_on == "high":
        floor = config.complexity_level_high
    else:
        floor = config.complexity_level_extreme

    hits = [
        r
        for r in reports
        if r.models and (floor is None or r.max_complexity >= floor)
    ]
    if hits:
        console.print(f"[red]--fail-on {fail_on}:[/red] {len(hits)} file(s) over the limit")
        return True
    return False
