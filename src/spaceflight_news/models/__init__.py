"""Data models for spaceflight_news."""

from spaceflight_news.models.model_spaceflight_news import (
    Article,
    Author,
    Blog,
    Event,
    Launch,
    PaginatedResponse,
    Report,
    Social,
)

__all__ = [
    "Article",
    "Author",
    "Blog",
    "Event",
    "Launch",
    "PaginatedResponse",
    "Report",
    "Social",
]
