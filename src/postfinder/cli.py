"""Command line interface for PostFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from postfinder.config import AppConfig, default_port
from postfinder.index.export import write_snapshot
from postfinder.index.indexer import build_engine
from postfinder.index.search import SearchEngine


console = Console()
app = typer.Typer(help="PostFinder - full-text and tag search for a blog")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_engine(content: Path | None) -> SearchEngine:
    config = AppConfig(content_dir=content if content is not None else AppConfig().content_dir)
    content_dir = config.resolve_content_dir(Path.cwd())
    if not content_dir.exists():
        raise typer.BadParameter(f"Content directory not found: {content_dir}")

    engine, stats = build_engine([content_dir])
    logging.getLogger(__name__).info(
        "Loaded %d posts (skipped: %d, failed: %d)", stats.loaded, stats.skipped, stats.failed
    )
    return engine


@app.command()
def search(
    queries: List[str] = typer.Argument(..., help="One or more queries"),
    content: Path = typer.Option(None, "--content", help="Directory with markdown posts"),
    workers: int = typer.Option(AppConfig().workers, help="Worker threads for multiple queries"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search posts by tag or by words in their title and body."""
    _setup_logging(verbose)
    engine = _load_engine(content)

    for query, results in zip(queries, engine.search_many(queries, workers=workers)):
        if not results:
            console.print(f"[yellow]No matches found for '{query}'.[/yellow]")
            continue

        table = Table(title=query, show_header=True, header_style="bold magenta")
        table.add_column("Date")
        table.add_column("Post")
        table.add_column("Title")
        table.add_column("Tags")

        for document in results:
            table.add_row(
                document.published_at.strftime("%Y-%m-%d"),
                document.slug,
                document.title,
                ", ".join(document.tags),
            )

        console.print(table)


@app.command()
def suggest(
    prefix: str = typer.Argument(..., help="Partial query"),
    content: Path = typer.Option(None, "--content", help="Directory with markdown posts"),
    limit: int = typer.Option(AppConfig().suggestion_limit, help="Maximum suggestions"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Suggest tags and titles for a partial query."""
    _setup_logging(verbose)
    engine = _load_engine(content)

    suggestions = engine.suggest(prefix, limit=limit)
    if not suggestions:
        console.print("[yellow]No suggestions.[/yellow]")
        return
    for suggestion in suggestions:
        console.print(suggestion)


@app.command()
def export(
    content: Path = typer.Option(None, "--content", help="Directory with markdown posts"),
    dist: Path = typer.Option(None, "--dist", help="Output directory"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Write search-index.json for client-side search."""
    _setup_logging(verbose)
    engine = _load_engine(content)

    config = AppConfig(dist_dir=dist if dist is not None else AppConfig().dist_dir)
    target = write_snapshot(engine.export_snapshot(), config.resolve_dist_dir(Path.cwd()))
    console.print(f"Search index written to [bold]{target}[/bold]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(None, help="Server port (defaults to $PORT or 8080)"),
    content: Path = typer.Option(None, "--content", help="Directory with markdown posts"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from postfinder.web.app import create_app

    config = AppConfig(content_dir=content if content is not None else AppConfig().content_dir)
    port = port if port is not None else default_port()
    content_dir = config.resolve_content_dir(Path.cwd())
    if not content_dir.exists():
        console.print("[yellow]Warning: content directory not found, searches will be empty.[/yellow]")

    console.print(f"Starting web interface on http://{host}:{port} (posts: {content_dir})")
    uvicorn.run(
        create_app(config=config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
