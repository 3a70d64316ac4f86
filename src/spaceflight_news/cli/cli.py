"""Command-line interface for spaceflight-news."""

import asyncio
import json
import logging
from pathlib import Path

import click

from spaceflight_news.config import get_settings
from spaceflight_news.data_sources.base_client import DataSourceError
from spaceflight_news.data_sources.spaceflight_news import SpaceflightNewsClient
from spaceflight_news.db import migration
from spaceflight_news.db.session import get_engine
from spaceflight_news.services.executor import APIExecutor
from spaceflight_news.services.schema_manager import ConfigurationError

logger = logging.getLogger(__name__)

RESOURCES = ("articles", "blogs", "reports")


@click.group()
@click.version_option(package_name="spaceflight-news")
def main():
    """Spaceflight News: fetch news data and manage its database tables."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Executor TOML configuration (default: settings.config_path).",
)
def run(config_path: Path | None):
    """Fetch every enabled endpoint of a TOML configuration."""
    click.echo("SpaceDevs API Executor")
    click.echo("======================")

    path = config_path or get_settings().config_path
    try:
        executor = APIExecutor.from_config_file(path)
    except ConfigurationError as e:
        click.echo("API execution failed.", err=True)
        raise click.ClickException(str(e)) from e

    failures = asyncio.run(executor.execute_all())
    if failures:
        click.echo(f"API execution completed with {failures} failed endpoint(s).")
    else:
        click.echo("API execution completed successfully!")


async def _fetch(resource: str, item_id: int | None, raw: bool):
    async with SpaceflightNewsClient() as client:
        if item_id is not None and raw:
            return await client.get_json(f"{resource}/{item_id}")
        if item_id is not None:
            getter = {
                "articles": client.get_article,
                "blogs": client.get_blog,
                "reports": client.get_report,
            }[resource]
            return (await getter(item_id)).model_dump(mode="json", by_alias=True)
        if raw:
            getter = {
                "articles": client.get_articles,
                "blogs": client.get_blogs,
                "reports": client.get_reports,
            }[resource]
            return await getter()
        getter = {
            "articles": client.get_articles_structured,
            "blogs": client.get_blogs_structured,
            "reports": client.get_reports_structured,
        }[resource]
        return (await getter()).model_dump(mode="json", by_alias=True)


@main.command()
@click.argument("resource", type=click.Choice(RESOURCES))
@click.option("--id", "item_id", type=int, default=None, help="Fetch a single item.")
@click.option("--raw", is_flag=True, help="Print the response without validation.")
def fetch(resource: str, item_id: int | None, raw: bool):
    """Fetch articles, blogs or reports from the Spaceflight News API."""
    try:
        data = asyncio.run(_fetch(resource, item_id, raw))
    except DataSourceError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@main.command()
@click.argument("direction", type=click.Choice(["up", "down"]))
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (default: settings.database_url).",
)
def migrate(direction: str, database_url: str | None):
    """Create (up) or drop (down) the Spaceflight News tables."""
    engine = get_engine(database_url)
    try:
        tables = migration.up(engine) if direction == "up" else migration.down(engine)
    finally:
        engine.dispose()
    verb = "Created" if direction == "up" else "Dropped"
    click.echo(f"{verb} {len(tables)} tables.")


if __name__ == "__main__":
    main()
