"""
Spaceflight News API clients.

SpaceflightNewsClient: typed and raw access to articles, blogs and reports
SpaceDevsDataClient: generic access to the Launch Library data API
"""

from __future__ import annotations

import logging
from typing import Any

from spaceflight_news.config import get_settings
from spaceflight_news.data_sources.base_client import BaseClient, ClientConfig
from spaceflight_news.models.model_spaceflight_news import (
    Article,
    Blog,
    PaginatedResponse,
    Report,
)

logger = logging.getLogger(__name__)


class SpaceflightNewsClient(BaseClient):
    """Client for the Spaceflight News API (v4)."""

    _source_name = "spaceflight_news"

    def __init__(
        self, base_url: str | None = None, config: ClientConfig | None = None
    ) -> None:
        settings = get_settings()
        super().__init__(
            base_url or settings.spaceflight_news_base_url,
            config or ClientConfig(timeout_seconds=settings.timeout_seconds),
        )

    # -- Structured lists -----------------------------------------------------

    async def get_articles_structured(self) -> PaginatedResponse[Article]:
        return await self.get("articles", PaginatedResponse[Article])

    async def get_blogs_structured(self) -> PaginatedResponse[Blog]:
        return await self.get("blogs", PaginatedResponse[Blog])

    async def get_reports_structured(self) -> PaginatedResponse[Report]:
        return await self.get("reports", PaginatedResponse[Report])

    # -- Single items ---------------------------------------------------------

    async def get_article(self, article_id: int) -> Article:
        """Fetch a single article. Hits GET /articles/{id}."""
        return await self.get(f"articles/{article_id}", Article)

    async def get_blog(self, blog_id: int) -> Blog:
        """Fetch a single blog post. Hits GET /blogs/{id}."""
        return await self.get(f"blogs/{blog_id}", Blog)

    async def get_report(self, report_id: int) -> Report:
        """Fetch a single report. Hits GET /reports/{id}."""
        return await self.get(f"reports/{report_id}", Report)

    # -- Raw JSON -------------------------------------------------------------

    async def get_articles(self) -> Any:
        return await self.get_json("articles")

    async def get_blogs(self) -> Any:
        return await self.get_json("blogs")

    async def get_reports(self) -> Any:
        return await self.get_json("reports")


class SpaceDevsDataClient(BaseClient):
    """Client for the SpaceDevs Launch Library data API.

    Only the generic ``get`` / ``get_json`` are offered; callers pick the
    path and the target type.
    """

    _source_name = "spacedevs_data"

    def __init__(
        self, base_url: str | None = None, config: ClientConfig | None = None
    ) -> None:
        settings = get_settings()
        super().__init__(
            base_url or settings.spacedevs_data_base_url,
            config or ClientConfig(timeout_seconds=settings.timeout_seconds),
        )
