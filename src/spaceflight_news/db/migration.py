"""Create / drop the Spaceflight News tables.

``up`` creates lookup tables, then content tables, then the join tables
(with their indexes); ``down`` drops them in the reverse dependency order.
Both skip tables that are already in the target state.
"""

import logging

from sqlalchemy import Engine, Table

from spaceflight_news.db.base import Base

# Registers every table on Base.metadata.
from spaceflight_news.sqlalchemy import space_devs  # noqa: F401

logger = logging.getLogger(__name__)

LOOKUP_TABLES: tuple[str, ...] = ("authors", "author_socials", "launches", "events")
CONTENT_TABLES: tuple[str, ...] = ("articles", "blogs", "reports")
JOIN_TABLES: tuple[str, ...] = (
    "article_authors",
    "blog_authors",
    "report_authors",
    "article_launches",
    "blog_launches",
    "report_launches",
    "article_events",
    "blog_events",
    "report_events",
)

UP_ORDER: tuple[str, ...] = LOOKUP_TABLES + CONTENT_TABLES + JOIN_TABLES
DOWN_ORDER: tuple[str, ...] = tuple(reversed(UP_ORDER))


def _table(name: str) -> Table:
    return Base.metadata.tables[name]


def up(engine: Engine) -> list[str]:
    """Create every table in dependency order. Returns the names in order."""
    with engine.begin() as conn:
        for name in UP_ORDER:
            logger.info("Creating table %s", name)
            _table(name).create(conn, checkfirst=True)
    return list(UP_ORDER)


def down(engine: Engine) -> list[str]:
    """Drop every table, joins first. Returns the names in order."""
    with engine.begin() as conn:
        for name in DOWN_ORDER:
            logger.info("Dropping table %s", name)
            _table(name).drop(conn, checkfirst=True)
    return list(DOWN_ORDER)
