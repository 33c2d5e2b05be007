"""Command line interface for ModelSift."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from modelsift.config import AppConfig
from modelsift.index.search import SearchIndex
from modelsift.utils.files import collect_names
from modelsift.variants.classifier import classify
from modelsift.variants.grouping import group_variants
from modelsift.web.app import app as web_app
from modelsift.web.app import handle as web_handle


console = Console()
app = typer.Typer(help="ModelSift - variant grouping and search for model libraries")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_inputs(inputs: Optional[List[Path]]) -> List[Path]:
    if inputs:
        paths = list(inputs)
    else:
        paths = [AppConfig().resolve_library_path(Path.cwd())]
    for path in paths:
        if not path.exists():
            raise typer.BadParameter(f"Path not found: {path}")
    return paths


def _load_names(inputs: Optional[List[Path]]) -> List[str]:
    names = collect_names(_resolve_inputs(inputs), AppConfig().model_extensions)
    if not names:
        console.print("[yellow]No model files found.[/yellow]")
    return names


@app.command("classify")
def classify_names(
    names: List[str] = typer.Argument(..., help="File names to classify."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show the grouping key and variant label of each file name."""
    _setup_logging(verbose)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Key")
    table.add_column("Variant")

    for name in names:
        result = classify(name)
        label = result.variant_label.value if result.variant_label else "-"
        table.add_row(name, result.normalized_key, label)

    console.print(table)


@app.command()
def group(
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Files or folders to scan (defaults to the configured library).", resolve_path=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Group High/Low noise variants found in a model library."""
    _setup_logging(verbose)
    names = _load_names(inputs)
    if not names:
        return

    groups = group_variants(names)
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Key")
    table.add_column("Variants")
    table.add_column("Files")

    for item in groups:
        labels = ", ".join(label.value for label in item.labels if label is not None) or "-"
        table.add_row(item.key, labels, "\n".join(member.name for member in item.members))

    console.print(table)
    merged = sum(1 for item in groups if item.is_merged)
    console.print(f"Files: {len(names)}, items: {len(groups)}, merged: {merged}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Files or folders to search (defaults to the configured library).", resolve_path=True
    ),
    prefix: bool = typer.Option(False, "--prefix", help="Match token prefixes instead of substrings"),
    limit: int = typer.Option(20, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search model file names."""
    _setup_logging(verbose)
    names = _load_names(inputs)
    if not names:
        return

    index = SearchIndex()
    index.build(names)
    matches = index.search_prefix(query) if prefix else index.search(query)
    if not matches:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#")
    table.add_column("Name")
    for position in matches[:limit]:
        table.add_row(str(position), names[position])

    console.print(table)
    if len(matches) > limit:
        console.print(f"... {len(matches) - limit} more")


@app.command()
def suggest(
    prefix: str = typer.Argument(..., help="Prefix to complete"),
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Files or folders to use as vocabulary (defaults to the configured library).", resolve_path=True
    ),
    limit: int = typer.Option(AppConfig().suggestion_limit, help="Maximum suggestions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Autocomplete a search term from model file names."""
    _setup_logging(verbose)
    names = _load_names(inputs)
    if not names:
        return

    index = SearchIndex()
    index.build(names)
    suggestions = index.suggest(prefix, AppConfig().clamp_limit(limit))
    if not suggestions:
        console.print("[yellow]No suggestions.[/yellow]")
        return
    for token in suggestions:
        console.print(token)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    library: Optional[Path] = typer.Option(None, "--library", help="Model library to index at startup"),
) -> None:
    """Start the web API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    if library is not None:
        if not library.exists():
            raise typer.BadParameter(f"Path not found: {library}")
        names = collect_names([library], AppConfig().model_extensions)
        web_handle.rebuild(names)
        console.print(f"Indexed {len(names)} model files from {library}")

    console.print(f"Starting web API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
