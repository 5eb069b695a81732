"""Tariff ranker CLI, the entry-point for scraping a package page.

Usage:
    python cli/main.py --help
    python cli/main.py scrape https://example.com/packages

Output is a JSON array of listings (title, description, price, discount),
most expensive per year first.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from ranker.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from decimal import Decimal
from typing import Any, List, Optional

import typer

from ranker.config import settings
from ranker.scraper.errors import ScrapeError
from ranker.scraper.models import Listing

app = typer.Typer(
    name="ranker",
    help="Scrape a package page and rank its plans by annual cost.",
    no_args_is_help=True,
)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_listings(listings: List[Listing], indent: Optional[int] = None) -> str:
    """Serialise *listings* as a JSON array, keys in output order."""
    return json.dumps(
        [listing.to_dict() for listing in listings],
        default=_json_default,
        ensure_ascii=False,
        indent=indent,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Configure logging before any command runs."""
    level = logging.DEBUG if verbose else logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        typer.echo(f"Error: unknown LOG_LEVEL {settings.log_level!r}", err=True)
        raise typer.Exit(code=1)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="URL of the page to scrape."),
    strict: bool = typer.Option(
        settings.strict_html,
        "--strict/--lenient",
        help="Fail on malformed markup instead of ignoring it (default from STRICT_HTML).",
    ),
    indent: Optional[int] = typer.Option(None, help="Pretty-print the JSON with this indent."),
) -> None:
    """Scrape URL and print its listings as JSON, highest annual cost first."""
    from ranker.pipeline import scrape_listings

    try:
        listings = scrape_listings(url, strict=strict)
    except ScrapeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(render_listings(listings, indent=indent))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
