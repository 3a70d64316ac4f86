"""
API executor driven by a TOML configuration.

Each top-level table with a ``url`` is an endpoint; its schema and query
parameters are read by the SchemaManager from the same document, and the
``[config]`` section selects the output format. Enabled endpoints are
fetched one after another. A failing endpoint is reported and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from spaceflight_news.constants import QUERY_PARAMS_SECTION
from spaceflight_news.data_sources.base_client import ClientConfig, DataSourceError
from spaceflight_news.data_sources.rest_client import SchemaRESTClient
from spaceflight_news.models.model_schema import (
    EndpointConfig,
    GlobalConfig,
    format_param_value,
)
from spaceflight_news.services.formatting import render
from spaceflight_news.services.schema_manager import (
    ConfigurationError,
    SchemaManager,
    SchemaNotFoundError,
    get_section,
    is_owner_entry,
    parse_toml,
    read_toml_file,
)

logger = logging.getLogger(__name__)


def split_url(url: str) -> tuple[str, str]:
    """Split on the last ``/`` into (base URL, endpoint path)."""
    base, sep, endpoint = url.rpartition("/")
    if not sep:
        return url, ""
    return base, endpoint


def parse_endpoints(document: Mapping[str, Any]) -> list[EndpointConfig]:
    """Endpoint entries of the document, in document order."""
    endpoints = []
    for name, value in document.items():
        if not is_owner_entry(name, value):
            continue
        url = value.get("url")
        if not isinstance(url, str):
            continue

        query_params: dict[str, str] = {}
        section = get_section(document, name, QUERY_PARAMS_SECTION)
        for param_name, param_value in (section or {}).items():
            # Table-shaped definitions are served by their schema default.
            if isinstance(param_value, (str, int, float, bool)):
                query_params[param_name] = format_param_value(param_value)

        endpoints.append(
            EndpointConfig(
                name=name,
                url=url,
                enabled=value.get("enabled") is True,
                schema_name=name,
                query_params=query_params,
            )
        )
    return endpoints


def parse_global_config(document: Mapping[str, Any]) -> GlobalConfig:
    section = document.get("config")
    if section is None:
        return GlobalConfig()
    if not isinstance(section, Mapping):
        raise ConfigurationError("[config] must be a table")

    values = {}
    if isinstance(section.get("output_format"), str):
        values["output_format"] = section["output_format"]
    max_items = section.get("max_display_items")
    if isinstance(max_items, int) and not isinstance(max_items, bool):
        values["max_display_items"] = max(max_items, 0)
    try:
        return GlobalConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid [config] section: {e}") from e


class APIExecutor:
    """Runs every enabled endpoint of a configuration and prints results."""

    def __init__(
        self,
        schema_manager: SchemaManager,
        endpoints: list[EndpointConfig],
        global_config: GlobalConfig | None = None,
        client_config: ClientConfig | None = None,
    ) -> None:
        self.schema_manager = schema_manager
        self.endpoints = endpoints
        self.global_config = global_config or GlobalConfig()
        self.client_config = client_config

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], client_config: ClientConfig | None = None
    ) -> APIExecutor:
        schema_manager = SchemaManager()
        schema_manager.load(document)
        return cls(
            schema_manager,
            parse_endpoints(document),
            parse_global_config(document),
            client_config,
        )

    @classmethod
    def from_config_text(
        cls, text: str, client_config: ClientConfig | None = None
    ) -> APIExecutor:
        return cls.from_document(parse_toml(text), client_config)

    @classmethod
    def from_config_file(
        cls, path: Path | str, client_config: ClientConfig | None = None
    ) -> APIExecutor:
        logger.info("Loading executor configuration from %s", path)
        return cls.from_document(read_toml_file(path), client_config)

    async def execute_all(self) -> int:
        """Run every enabled endpoint in order. Returns the failure count."""
        click.echo("Executing API endpoints...\n")

        failures = 0
        for endpoint in self.endpoints:
            if not endpoint.enabled:
                logger.debug("Skipping disabled endpoint %s", endpoint.name)
                continue
            if not await self.execute_endpoint(endpoint):
                failures += 1
        return failures

    async def execute_endpoint(self, endpoint: EndpointConfig) -> bool:
        """Fetch and print one endpoint. Returns False if it failed."""
        click.echo(f"Fetching data from: {endpoint.name} ({endpoint.url})")
        base_url, endpoint_path = split_url(endpoint.url)

        ok = True
        async with SchemaRESTClient(
            base_url, self.schema_manager, self.client_config
        ) as client:
            try:
                data = await client.get_with_params_and_schema(
                    endpoint_path, endpoint.schema_name, endpoint.query_params
                )
            except (DataSourceError, SchemaNotFoundError) as e:
                logger.warning("Endpoint %s failed: %s", endpoint.name, e)
                click.echo(f"Error fetching {endpoint.name}: {e}", err=True)
                ok = False
            else:
                self.display_results(data)

        click.echo()
        return ok

    def display_results(self, data: Any) -> None:
        for line in render(
            data,
            self.global_config.output_format,
            self.global_config.max_display_items,
        ):
            click.echo(line)
