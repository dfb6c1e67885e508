"""CLI entry point for mapeo-deconstruct."""

from __future__ import annotations

import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

import mapeo_deconstructor
from mapeo_deconstructor.core.settings import Settings, configure_logging

app = typer.Typer(
    name="mapeo-deconstruct",
    help="Split a Mapeo / CoMapeo configuration into editable files.",
    no_args_is_help=True,
)
console = Console()


def _resolve_settings(verbose: bool) -> Settings:
    """Resolve settings from CLI flag → env vars → defaults."""
    settings = Settings.from_env()
    if verbose:
        settings = replace(settings, verbose=True)
    configure_logging(settings.verbose)
    return settings


@app.command()
def deconstruct(
    config: str = typer.Argument(
        ..., help="Path to a .mapeosettings / .comapeocat file or a directory"
    ),
    output: Optional[str] = typer.Argument(
        None, help="Output directory (defaults to the current directory)"
    ),
    skip_cleanup: bool = typer.Option(
        False, "--skip-cleanup", help="Keep source files in the output"
    ),
    skip_package_json: bool = typer.Option(
        False, "--skip-package-json", help="Do not generate package.json"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every file written"
    ),
) -> None:
    """Deconstruct a configuration into presets, fields, icons and messages."""
    from mapeo_deconstructor.core.errors import DeconstructError
    from mapeo_deconstructor.core.pipeline import Pipeline

    settings = _resolve_settings(verbose)
    console.print(f"[dim]Building project from {config}...[/]")

    try:
        result = Pipeline(settings).run(
            config,
            output,
            skip_package_json=skip_package_json,
            skip_cleanup=skip_cleanup,
        )
    except DeconstructError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    table = Table(title="Deconstruction")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Package", result.package_name or "")
    table.add_row("Working directory", str(result.working_dir))
    table.add_row("Output directory", str(result.output_dir))
    table.add_row("Files written", str(result.files_written))
    table.add_row("Files removed", str(result.files_removed))
    console.print(table)
    console.print("[green]Done![/]")


@app.command()
def info(
    config: str = typer.Argument(
        ..., help="Path to a .mapeosettings / .comapeocat file or a directory"
    ),
) -> None:
    """Show what a configuration contains without writing any output."""
    from mapeo_deconstructor.core.errors import DeconstructError
    from mapeo_deconstructor.core.extractor import extract_config
    from mapeo_deconstructor.core.pipeline import summarize

    settings = _resolve_settings(False)
    # Archives are unpacked into a scratch root that is removed afterwards.
    with tempfile.TemporaryDirectory(prefix="mapeo-info-") as scratch:
        try:
            package = extract_config(
                config, settings=replace(settings, root_dir=Path(scratch))
            )
        except DeconstructError as e:
            console.print(f"[red]Error: {e}[/]")
            raise typer.Exit(1)

        try:
            counts = summarize(package.working_dir)
        except Exception as e:
            console.print(f"[red]Could not read configuration contents: {e}[/]")
            raise typer.Exit(1)

    table = Table(title="Configuration")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Source", str(package.source_path))
    table.add_row("Format", package.format.value)
    table.add_row("Working directory", str(package.working_dir))
    for key, count in counts.items():
        table.add_row(key.capitalize(), str(count))
    console.print(table)


@app.command()
def version() -> None:
    """Print version."""
    console.print(f"mapeo-deconstruct {mapeo_deconstructor.__version__}")


if __name__ == "__main__":
    app()
