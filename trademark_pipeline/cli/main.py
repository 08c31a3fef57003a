"""Trademark Pipeline CLI.

Usage:
    trademark-pipeline fetch [OPTIONS]
    trademark-pipeline version

Configuration comes from the environment (or a .env file):
    API_KEY   Subscription key for the registry API (required)
    VERBOSE   If set, dump both versions of every duplicate record

Exit codes: 0 when the run stops (end of data, page cap, duplicate
threshold) or when API_KEY is missing, 1 on a fatal pipeline error.
"""

# Load .env file before any other imports
from dotenv import load_dotenv

load_dotenv()

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..collectors.pagination import collect_trademarks
from ..config.settings import get_settings
from ..core.errors import PipelineError
from ..observability.logger import get_logger, setup_logging
from ..observability.metrics import RunMetrics

app = typer.Typer(
    name="trademark-pipeline",
    help="Fetch the trademark register page by page and report duplicates",
    add_completion=False,
)

console = Console(stderr=True)
logger = get_logger(__name__)


@app.command()
def fetch(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Dump duplicate records as JSON")
    ] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only log errors")] = False,
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Log as JSON lines")] = False,
    max_pages: Annotated[
        int | None, typer.Option("--max-pages", help="Stop after a page numbered above this")
    ] = None,
    max_duplicates: Annotated[
        int | None, typer.Option("--max-duplicates", help="Stop after more duplicates than this")
    ] = None,
) -> None:
    """Fetch every page of the register and detect duplicate records.

    Examples:
        trademark-pipeline fetch
        trademark-pipeline fetch --verbose
        trademark-pipeline fetch --json-logs --max-pages 10
    """
    settings = get_settings()
    setup_logging(
        level=logging.INFO,
        json_format=json_logs or settings.log_json,
        quiet=quiet,
        force=True,
    )

    if not settings.has_api_key:
        logger.warning("API_KEY environment variable required")
        raise typer.Exit(code=0)

    overrides: dict[str, object] = {}
    if verbose:
        overrides["verbose"] = True
    if max_pages is not None:
        overrides["max_page_number"] = max_pages
    if max_duplicates is not None:
        overrides["max_duplicates"] = max_duplicates
    if overrides:
        settings = settings.model_copy(update=overrides)

    logger.info("Configuration", extra={"config": settings.summary()})

    metrics = RunMetrics()
    try:
        result = collect_trademarks(settings, metrics=metrics)
    except PipelineError as e:
        metrics.complete(error_type=type(e).__name__)
        logger.error(f"Run failed: {e}", extra={"error": e.to_dict()})
        if not quiet:
            console.print(metrics.to_summary())
        console.print(f"[red]Run failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    logger.info("Run finished", extra={"result": result.to_dict(), "metrics": metrics.to_dict()})
    if not quiet:
        console.print(metrics.to_summary())


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Trademark Pipeline v{__version__}[/bold]")


def main() -> None:
    app()
