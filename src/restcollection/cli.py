"""Command-line interface for restcollection.

This module provides commands for fetching a page of a remote collection
and for computing the URL a page would be fetched from.
"""

import asyncio
import json
from typing import Any, NoReturn

import click

from restcollection.application.remote_collection import RemoteCollection
from restcollection.core.config import get_settings
from restcollection.core.exceptions import CollectionError, RequestError
from restcollection.core.logging import configure_logging, get_logger
from restcollection.domain.entities.collection_settings import CollectionSettings


def parse_params(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Parse repeated ``key=value`` options into a params map.

    Raises:
        click.BadParameter: If a pair has no '='.
    """
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--param")
        params[key] = value
    return params


def build_collection(
    endpoint: str,
    pairs: tuple[str, ...],
    limit: int | None,
    attribute: str | None = None,
) -> RemoteCollection:
    params = parse_params(pairs)
    if limit is not None:
        params["limit"] = limit
    settings = CollectionSettings(endpoint=endpoint, params=params)
    if attribute:
        settings.result_attribute = attribute
    return RemoteCollection(settings)


@click.group()
@click.version_option(version="0.1.0", prog_name="restcollection")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides environment)",
)
def cli(log_level: str | None) -> None:
    """restcollection - work with paginated REST collections."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.argument("endpoint")
@click.option("--param", "-p", "pairs", multiple=True, help="Query parameter as key=value")
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--page", type=int, default=None, help="1-indexed page to fetch (requires a limit)")
@click.option("--sort", type=str, default=None, help="Sort expression")
@click.option("--search", type=str, default=None, help="Search query")
@click.option("--attribute", type=str, default=None, help="Response field holding the records")
def fetch(
    endpoint: str,
    pairs: tuple[str, ...],
    limit: int | None,
    page: int | None,
    sort: str | None,
    search: str | None,
    attribute: str | None,
) -> None:
    """Fetch one page of ENDPOINT and print each record as a JSON line."""
    logger = get_logger(__name__)

    async def run() -> RemoteCollection:
        collection = build_collection(endpoint, pairs, limit, attribute)
        collection.param("sort", sort)
        collection.param("q", search)
        if page is not None:
            await collection.page(page)
        else:
            await collection.init()
        return collection

    try:
        collection = asyncio.run(run())
    except RequestError as e:
        logger.error("Fetch failed", endpoint=endpoint, reason=e.reason, error=str(e))
        click.echo(f"Error ({e.reason}): {e}", err=True)
        raise SystemExit(1)
    except CollectionError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    for record in collection:
        click.echo(json.dumps(record.to_dict(), default=str))
    logger.info("Fetched records", endpoint=endpoint, count=len(collection))


@cli.command()
@click.argument("endpoint")
@click.option("--param", "-p", "pairs", multiple=True, help="Query parameter as key=value")
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--page", type=int, default=None, help="1-indexed page")
def url(endpoint: str, pairs: tuple[str, ...], limit: int | None, page: int | None) -> None:
    """Print the URL a page of ENDPOINT would be fetched from."""
    collection = build_collection(endpoint, pairs, limit)
    if page is not None:
        click.echo(collection.url_page(page))
    else:
        click.echo(collection.url())


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `restcollection` command is run
    or when using `python -m restcollection`.
    """
    cli()
