"""Pydantic models for Spaceflight News API data."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope returned by list endpoints: one page of results.

    ``next`` and ``previous`` are opaque page URLs, None at either end.
    """

    count: int
    next: str | None = None
    previous: str | None = None
    results: list[T]


class Social(BaseModel):
    """Social media handles attached to an author."""

    model_config = ConfigDict(populate_by_name=True)

    twitter: str | None = Field(default=None, alias="x")
    youtube: str | None = None
    instagram: str | None = None
    linkedin: str | None = None
    mastodon: str | None = None
    bluesky: str | None = None


class Author(BaseModel):
    name: str
    socials: Social | None = None


class Launch(BaseModel):
    """Launch Library launch referenced by a news item."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="launch_id")
    provider: str


class Event(BaseModel):
    """Launch Library event referenced by a news item."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="event_id")
    provider: str


class _NewsItem(BaseModel):
    """Fields shared by articles, blogs and reports."""

    id: int
    title: str
    authors: list[Author] = []
    url: str
    image_url: str
    news_site: str
    published_at: str
    updated_at: str

    @model_validator(mode="before")
    @classmethod
    def coerce_nones(cls, values: dict) -> dict:
        if not isinstance(values, dict):
            return values
        values = dict(values)
        for field_name, field_info in cls.model_fields.items():
            if field_info.is_required() or field_info.default is None:
                continue
            if field_name in values and values[field_name] is None:
                values[field_name] = field_info.default
        return values


class Article(_NewsItem):
    """Populated from GET /articles and GET /articles/{id}."""

    summary: str
    featured: bool
    launches: list[Launch] = []
    events: list[Event] = []


class Blog(_NewsItem):
    """Populated from GET /blogs and GET /blogs/{id}."""

    summary: str
    featured: bool
    launches: list[Launch] = []
    events: list[Event] = []


class Report(_NewsItem):
    """Populated from GET /reports and GET /reports/{id}."""

    summary: str | None = None
