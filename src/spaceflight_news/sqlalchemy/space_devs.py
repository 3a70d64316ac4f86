"""Relational model of the Spaceflight News data.

articles / blogs / reports share one column set. Authors, their socials,
launches and events are lookup tables; the nine ``<content>_<lookup>``
tables are many-to-many joins with cascade deletes on both sides. The
pagination envelope (count / next / previous) is not stored.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from spaceflight_news.db.base import Base

# -- Lookup tables ------------------------------------------------------------


class Authors(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String, nullable=False)


class AuthorSocials(Base):
    __tablename__ = "author_socials"

    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE", name="fk-author_socials-author_id"),
        primary_key=True,
        autoincrement=False,
    )
    x: Mapped[str | None] = mapped_column(String, nullable=True)
    youtube: Mapped[str | None] = mapped_column(String, nullable=True)
    instagram: Mapped[str | None] = mapped_column(String, nullable=True)
    linkedin: Mapped[str | None] = mapped_column(String, nullable=True)
    mastodon: Mapped[str | None] = mapped_column(String, nullable=True)
    bluesky: Mapped[str | None] = mapped_column(String, nullable=True)


class Launches(Base):
    __tablename__ = "launches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    provider: Mapped[str | None] = mapped_column(String, nullable=True)


class Events(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    provider: Mapped[str | None] = mapped_column(String, nullable=True)


# -- Content tables -----------------------------------------------------------


class ContentMixin:
    """Columns shared by articles, blogs and reports."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    url: Mapped[str | None] = mapped_column(String, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    news_site: Mapped[str | None] = mapped_column(String, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    published_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )


class Articles(ContentMixin, Base):
    __tablename__ = "articles"


class Blogs(ContentMixin, Base):
    __tablename__ = "blogs"


class Reports(ContentMixin, Base):
    __tablename__ = "reports"


# -- Join tables --------------------------------------------------------------


def _join_table(owner: str, owner_table: str, target: str, target_table: str) -> Table:
    """``<owner>_<target_table>`` with a composite key and cascading FKs."""
    name = f"{owner}_{target_table}"
    owner_col = f"{owner}_id"
    target_col = f"{target}_id"
    return Table(
        name,
        Base.metadata,
        Column(
            owner_col,
            Integer,
            ForeignKey(
                f"{owner_table}.id", ondelete="CASCADE", name=f"fk-{name}-{owner_col}"
            ),
            primary_key=True,
            nullable=False,
        ),
        Column(
            target_col,
            Integer,
            ForeignKey(
                f"{target_table}.id", ondelete="CASCADE", name=f"fk-{name}-{target_col}"
            ),
            primary_key=True,
            nullable=False,
        ),
    )


article_authors = _join_table("article", "articles", "author", "authors")
blog_authors = _join_table("blog", "blogs", "author", "authors")
report_authors = _join_table("report", "reports", "author", "authors")
article_launches = _join_table("article", "articles", "launch", "launches")
blog_launches = _join_table("blog", "blogs", "launch", "launches")
report_launches = _join_table("report", "reports", "launch", "launches")
article_events = _join_table("article", "articles", "event", "events")
blog_events = _join_table("blog", "blogs", "event", "events")
report_events = _join_table("report", "reports", "event", "events")

Index("idx-article_authors-author_id", article_authors.c.author_id)
Index("idx-blog_authors-author_id", blog_authors.c.author_id)
Index("idx-report_authors-author_id", report_authors.c.author_id)
