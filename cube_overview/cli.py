"""CLI interface for Cube Overview Builder."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cube_overview.config import Settings, load_overview
from cube_overview.data.cache import ResponseCache
from cube_overview.data.cubecobra import CubeCobraClient
from cube_overview.data.scryfall import ScryfallClient
from cube_overview.errors import CubeOverviewError
from cube_overview.report.markdown_gen import DeckRenderer, OverviewRenderer

app = typer.Typer(
    name="cube-overview",
    help="Cube Overview Builder - Render CubeCobra cube overviews with Scryfall card images",
)
# stdout is reserved for the rendered document
console = Console(stderr=True)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def render(
    definition: str = typer.Argument(..., help="Overview definition YAML file"),
    output: Optional[str] = typer.Option(
        None,
        "--output", "-o",
        help="Write the overview to this file instead of stdout",
    ),
    cube_id: Optional[str] = typer.Option(
        None,
        "--cube-id",
        help="CubeCobra cube id (overrides the definition and environment)",
    ),
    cache_dir: Optional[str] = typer.Option(
        None,
        "--cache-dir",
        help="Directory for cached responses",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
):
    """
    Render a cube overview.

    Example:
        cube-overview render config/kaokun.yaml > overview.md
    """
    setup_logging(verbose)
    settings = Settings.from_env()

    try:
        loaded = load_overview(definition)

        cache = ResponseCache(
            cache_dir=cache_dir or settings.cache_dir,
            timeout=settings.timeout,
        )
        cube_cobra = CubeCobraClient(
            cube_id=cube_id or loaded.cube_id or settings.cube_id,
            cache=cache,
        )
        renderer = OverviewRenderer(
            DeckRenderer(cube_cobra, ScryfallClient(cache=cache)),
            template_dir=settings.template_dir,
        )

        if output:
            path = renderer.save(loaded.overview, output)
            console.print(f"📄 Overview: [cyan]{path}[/cyan]")
        else:
            typer.echo(renderer.render(loaded.overview))
    except CubeOverviewError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)


@app.command()
def cache_stats(
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir"),
):
    """Show cache statistics."""
    settings = Settings.from_env()
    cache = ResponseCache(cache_dir=cache_dir or settings.cache_dir)
    stats = cache.get_stats()

    console.print("\n[bold]Cache Statistics[/bold]\n")
    console.print(f"Location: {stats['cache_dir']}")
    console.print(f"Total entries: {stats['total_entries']}")
    console.print(f"Total size: {stats['total_size_mb']:.2f} MB")


@app.command()
def cache_clear(
    cache_dir: Optional[str] = typer.Option(None, "--cache-dir"),
):
    """Clear all cached responses."""
    settings = Settings.from_env()
    cache = ResponseCache(cache_dir=cache_dir or settings.cache_dir)
    count = cache.clear_all()
    console.print(f"Cleared {count} cache entries.")


@app.command()
def version():
    """Show version information."""
    from cube_overview import __version__
    console.print(f"Cube Overview Builder v{__version__}")


if __name__ == "__main__":
    app()
