"""CLI entry point."""

from __future__ import annotations

import asyncio
import json
from enum import Enum

import typer
from rich.console import Console
from rich.table import Table

from feedroute.core.config import get_settings
from feedroute.core.exceptions import FeedRouteError
from feedroute.core.logging import configure_logging
from feedroute.models.feed import FeedDocument

app = typer.Typer(
    name="feedroute",
    help="Turn listing pages and JSON APIs into RSS feeds",
    no_args_is_help=True,
)
console = Console()


class OutputFormat(str, Enum):
    rss = "rss"
    json = "json"


def parse_params(values: list[str] | None) -> dict[str, str]:
    """Parse ``key=value`` pairs given with ``--param``."""
    params = {}
    for value in values or []:
        key, sep, param = value.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got {value!r}", param_hint="--param")
        params[key.strip()] = param.strip()
    return params


@app.command()
def version() -> None:
    """Show version."""
    from feedroute import __version__

    console.print(f"feedroute {__version__}")


@app.command()
def routes() -> None:
    """List registered routes."""
    from feedroute.routes import list_routes

    table = Table(title="Routes")
    table.add_column("Key", style="bold")
    table.add_column("Path")
    table.add_column("Name")
    table.add_column("Example")
    for info in list_routes():
        table.add_row(info["key"], info["path"], info["name"], info["example"])
    console.print(table)


@app.command()
def run(
    route: str = typer.Argument(..., help="Route key, e.g. gov"),
    param: list[str] = typer.Option(None, "--param", "-p", help="Route parameter as key=value"),
    output: OutputFormat = typer.Option(OutputFormat.rss, "--format", "-f", help="Output format"),
    log_level: str = typer.Option(None, "--log-level", help="Override FEEDROUTE_LOG_LEVEL"),
) -> None:
    """Run a route and print its feed."""
    from feedroute.routes import get_route

    settings = get_settings()
    configure_logging(log_level or settings.log_level)
    params = parse_params(param)

    async def collect() -> FeedDocument:
        async with get_route(route)(settings=settings) as instance:
            return await instance.run(params)

    try:
        feed = asyncio.run(collect())
    except FeedRouteError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    if output == OutputFormat.json:
        typer.echo(json.dumps(feed.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(feed.to_rss())


if __name__ == "__main__":
    app()
