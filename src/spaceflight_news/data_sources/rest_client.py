"""
Generic REST clients.

RESTClient: raw and typed GET against any base URL
SchemaRESTClient: adds query strings and response pass-through driven by a
  SchemaManager supplied at construction
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from spaceflight_news.data_sources.base_client import BaseClient, ClientConfig
from spaceflight_news.services.schema_manager import SchemaManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SchemaManagerMissingError(LookupError):
    """Raised when a schema-capable client is built without a manager."""

    def __init__(self) -> None:
        super().__init__("No schema manager configured")


class RESTClient(BaseClient):
    """A REST client for any JSON API rooted at ``base_url``."""

    _source_name = "rest"


class SchemaRESTClient(RESTClient):
    """REST client whose requests are shaped by configuration schemas.

    The schema manager is shared and only read; several clients may hold
    the same one.
    """

    def __init__(
        self,
        base_url: str,
        schema_manager: SchemaManager | None,
        config: ClientConfig | None = None,
    ) -> None:
        if schema_manager is None:
            raise SchemaManagerMissingError()
        super().__init__(base_url, config)
        self.schema_manager = schema_manager

    def _url_with_params(
        self, endpoint: str, schema_name: str, params: Mapping[str, str]
    ) -> str:
        query_string = self.schema_manager.build_query_string(schema_name, params)
        return f"{self.build_url(endpoint)}{query_string}"

    async def get_with_schema(self, endpoint: str, schema_name: str) -> Any:
        """Fetch raw JSON and pass it through ``schema_name``."""
        data = await self.get_json(endpoint)
        return self.schema_manager.apply_schema(schema_name, data)

    async def get_with_params(
        self,
        endpoint: str,
        schema_name: str,
        params: Mapping[str, str],
        response_type: type[T],
    ) -> T:
        """Fetch with the schema's query string and deserialize the body."""
        url = self._url_with_params(endpoint, schema_name, params)
        data = await self._fetch_json(url)
        return self._deserialize(data, response_type, url)

    async def get_with_params_and_schema(
        self, endpoint: str, schema_name: str, params: Mapping[str, str]
    ) -> Any:
        """Fetch with the schema's query string, then pass through the schema."""
        url = self._url_with_params(endpoint, schema_name, params)
        data = await self._fetch_json(url)
        return self.schema_manager.apply_schema(schema_name, data)
