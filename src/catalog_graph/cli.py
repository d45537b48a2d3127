"""Command-line report over a service metadata file.

Usage::

    python -m src.catalog_graph [PATH] [--limit N] [--json]
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.catalog_graph.analytics import summarize
from src.catalog_graph.indexer import build_graph
from src.catalog_graph.metadata_source import load_metadata_file
from src.shared.config import CatalogConfig
from src.shared.constants import CATALOG_GRAPH_LOGGER_NAME
from src.shared.errors import MetadataFetchError
from src.shared.logging import setup_logging
from src.shared.models.graph import CatalogAnalytics, CatalogGraph

_console = Console()


def _ranked_table(title: str, header: str, rows: list[tuple[str, object]]) -> Table:
    table = Table(title=title, title_justify="left")
    table.add_column("Service", style="cyan")
    table.add_column(header, justify="right")
    for name, value in rows:
        table.add_row(name, str(value))
    return table


def print_report(graph: CatalogGraph, analytics: CatalogAnalytics) -> None:
    """Render the graph summary and analytics as Rich tables."""
    _console.print(
        f"[bold]{len(graph.nodes)}[/bold] nodes, "
        f"[bold]{len(graph.edges)}[/bold] edges, "
        f"[bold]{len(graph.all_event_names)}[/bold] events"
        + (f", [yellow]{len(graph.skipped)} skipped[/yellow]" if graph.skipped else "")
    )
    _console.print(_ranked_table(
        "Most consumed events", "Consumers",
        [(r.id, r.count) for r in analytics.top_by_event_consumers],
    ))
    _console.print(_ranked_table(
        "Most depended upon", "Dependents",
        [(r.id, r.count) for r in analytics.top_by_dependency_consumers],
    ))
    _console.print(_ranked_table(
        "Oldest updated", "Days ago",
        [(r.id, r.days_ago) for r in analytics.oldest_updated],
    ))

    orphans = Table(title="Orphaned published events", title_justify="left")
    orphans.add_column("Event", style="magenta")
    orphans.add_column("Producers")
    for orphan in analytics.orphan_published_events:
        orphans.add_row(orphan.event_name, ", ".join(orphan.producers))
    _console.print(orphans)


app = typer.Typer(
    name="catalog-graph",
    help="Index a service metadata file and report catalog analytics.",
    add_completion=False,
)


@app.command()
def report(
    path: Optional[Path] = typer.Argument(
        None, help="Metadata JSON array (default: SERVICE_METADATA_PATH)."
    ),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Top-N size."),
    as_json: bool = typer.Option(
        False, "--json", help="Print the graph and analytics as JSON."
    ),
) -> None:
    """Index PATH and print the catalog analytics."""
    config = CatalogConfig()
    setup_logging(CATALOG_GRAPH_LOGGER_NAME, config.log_level)

    try:
        services = load_metadata_file(path or config.metadata_path)
    except MetadataFetchError as exc:
        _console.print(f"[red]error:[/red] {exc.detail}")
        raise typer.Exit(code=1) from exc

    graph = build_graph(services)
    analytics = summarize(graph, limit or config.top_n)
    if as_json:
        payload = {
            "graph": graph.model_dump(mode="json"),
            "analytics": analytics.model_dump(mode="json"),
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        print_report(graph, analytics)


if __name__ == "__main__":
    app()
