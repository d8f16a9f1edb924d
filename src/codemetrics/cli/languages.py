"""Languages command: list recognized language ids."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CodeMetricsError
from ..languages import LANGUAGES
from ..scanning import get_supported_grammars
from . import app
from ._common import console, resolve_config


@app.command()
def languages(
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
):
    """List recognized language ids and whether each one is enabled."""
    try:
        settings = resolve_config(config=config)
    except CodeMetricsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    grammars = set(get_supported_grammars())

    table = Table(title="Languages")
    table.add_column("Language id", style="cyan")
    table.add_column("Engine")
    table.add_column("Grammar")
    table.add_column("Extensions")
    table.add_column("Enabled", justify="center")

    for spec in LANGUAGES.values():
        grammar = spec.grammar or "-"
        if spec.grammar is not None and spec.grammar not in grammars:
            grammar = f"[red]{grammar}[/red]"
        enabled = getattr(settings, spec.enable_flag)
        table.add_row(
            spec.language_id,
            spec.category.value,
            grammar,
            " ".join(spec.extensions),
            "[green]yes[/green]" if enabled else "[red]no[/red]",
        )
    console.print(table)
