"""Pytest configuration and fixtures."""

import pytest

from spaceflight_news.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; reset them around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_article() -> dict:
    """Sample article as returned by GET /articles/{id}."""
    return {
        "id": 30412,
        "title": "Starship completes fifth integrated flight test",
        "authors": [
            {
                "name": "Jane Doe",
                "socials": {"x": "https://x.com/janedoe", "bluesky": None},
            }
        ],
        "url": "https://example.com/starship-flight-5",
        "image_url": "https://example.com/starship.jpg",
        "news_site": "SpaceNews",
        "summary": "SpaceX caught the Super Heavy booster on its first attempt.",
        "published_at": "2024-10-13T12:25:00Z",
        "updated_at": "2024-10-13T12:40:12.345678Z",
        "featured": False,
        "launches": [
            {
                "launch_id": "1f2ab3c4-0000-4d5e-9f00-123456789abc",
                "provider": "Launch Library 2",
            }
        ],
        "events": [{"event_id": 781, "provider": "Launch Library 2"}],
    }


@pytest.fixture
def sample_page(sample_article) -> dict:
    """Sample paginated envelope with a single article."""
    return {
        "count": 1,
        "next": None,
        "previous": None,
        "results": [sample_article],
    }


@pytest.fixture
def schema_config_text() -> str:
    """Executor configuration with one enabled and one disabled endpoint."""
    return """
[config]
output_format = "detailed"
max_display_items = 2

[types]
Author = "object"

[articles]
url = "https://api.example.com/v4/articles"
enabled = true

[articles.schema]
id = "u32"
title = "String"
summary = "Option<String>"
authors = "Vec<Author>"

[articles.query_params]
limit = 10
ordering = { type = "String", description = "Sort order" }

[blogs]
url = "https://api.example.com/v4/blogs"
enabled = false

[blogs.query_params]
limit = "5"
"""
