"""
Base client for the HTTP data sources.

Provides: a lazily created shared aiohttp session, URL joining, a single GET
round-trip with JSON decoding, pydantic deserialization into a target type,
and the data source exception hierarchy. Requests are not retried,
rate limited or cached.
"""

import asyncio
import json
import logging
import time
from typing import Any, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError

from spaceflight_news.constants import DEFAULT_TIMEOUT

logger = logging.getLogger("spaceflight_news.data_sources")

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ClientConfig(BaseModel):
    """Transport settings shared by every client."""

    timeout_seconds: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = {"Accept": "application/json"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class TransportError(DataSourceError):
    """Raised when the connection cannot be established or times out."""

    pass


class DeserializationError(DataSourceError):
    """Raised when a response body does not match the expected shape."""

    pass


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


def build_url(base_url: str, endpoint: str) -> str:
    """Join base and endpoint with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient:
    """
    Shared transport for the typed Spaceflight News client and the generic
    REST clients.

    Subclasses set ``_source_name`` (used in errors and log lines) and pass
    their base URL to ``__init__``.
    """

    _source_name: str = "http"

    def __init__(self, base_url: str, config: ClientConfig | None = None):
        self.base_url = base_url
        self.config = config or ClientConfig()
        self._session: aiohttp.ClientSession | None = None

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout, headers=self.config.headers
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Requests ------------------------------------------------------------

    def build_url(self, endpoint: str) -> str:
        return build_url(self.base_url, endpoint)

    async def _fetch_json(self, url: str) -> Any:
        """
        GET ``url`` and return the decoded JSON body.

        Raises TransportError for connection failures and timeouts,
        DataSourceError for HTTP status >= 400, and DeserializationError
        when the body is not text in its declared charset or not JSON.
        """
        session = await self._get_session()
        start = time.monotonic()
        logger.info("Request [%s] GET %s", self._source_name, url)

        try:
            async with session.get(url) as resp:
                if resp.status >= 400:
                    body = await resp.text(errors="replace")
                    raise DataSourceError(
                        self._source_name,
                        f"HTTP {resp.status}: {body[:500]}",
                        status_code=resp.status,
                    )
                raw = await resp.read()
                charset = resp.charset or "utf-8"
        except asyncio.TimeoutError as e:
            elapsed = time.monotonic() - start
            raise TransportError(
                self._source_name, f"Timeout after {elapsed:.1f}s: {url}"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(self._source_name, f"Connection error: {e}") from e

        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            raise DeserializationError(
                self._source_name, f"Response from {url} is not valid text: {e}"
            ) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(
                self._source_name, f"Response from {url} is not JSON: {e}"
            ) from e

        logger.info(
            "Success [%s] elapsed=%.2fs url=%s",
            self._source_name,
            time.monotonic() - start,
            url,
        )
        return data

    def _deserialize(self, data: Any, response_type: type[T], url: str) -> T:
        try:
            return TypeAdapter(response_type).validate_python(data)
        except ValidationError as e:
            raise DeserializationError(
                self._source_name,
                f"Response from {url} does not match {_type_name(response_type)}: {e}",
            ) from e

    async def get(self, endpoint: str, response_type: type[T]) -> T:
        """Fetch ``endpoint`` and deserialize the body as ``response_type``."""
        url = self.build_url(endpoint)
        data = await self._fetch_json(url)
        return self._deserialize(data, response_type, url)

    async def get_json(self, endpoint: str) -> Any:
        """Fetch ``endpoint`` and return the raw decoded JSON."""
        return await self._fetch_json(self.build_url(endpoint))


def _type_name(response_type: Any) -> str:
    return getattr(response_type, "__name__", repr(response_type))
