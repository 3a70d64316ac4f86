"""Project-wide constants."""

from pathlib import Path

# -- Base client defaults ---------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0

# -- Remote APIs ------------------------------------------------------------
SPACEFLIGHT_NEWS_API_BASE: str = "https://api.spaceflightnewsapi.net/v4"
SPACEDEVS_DATA_API_BASE: str = "https://ll.thespacedevs.com/2.2.0"

# -- Executor configuration -------------------------------------------------
DEFAULT_CONFIG_PATH: Path = Path("simple.toml")
DEFAULT_OUTPUT_FORMAT: str = "detailed"
DEFAULT_MAX_DISPLAY_ITEMS: int = 10

# Top-level TOML sections that never describe an endpoint or schema.
RESERVED_SECTIONS: frozenset[str] = frozenset({"types", "config"})

# Suffixes of sections that belong to an owning endpoint entry.
SCHEMA_SECTION: str = "schema"
QUERY_PARAMS_SECTION: str = "query_params"
NESTED_FIELDS_SECTION: str = "nested_fields"

# Keys on an endpoint entry that are never schema fields.
RESERVED_ENDPOINT_KEYS: frozenset[str] = frozenset(
    {
        "url",
        "enabled",
        "description",
        SCHEMA_SECTION,
        QUERY_PARAMS_SECTION,
        NESTED_FIELDS_SECTION,
    }
)

# -- Output formatting ------------------------------------------------------
TABLE_TITLE_WIDTH: int = 30
TABLE_COLUMN_WIDTH: int = 20
TABLE_TITLE_MAX_CHARS: int = 27
TABLE_PUBLISHED_MAX_CHARS: int = 20

# Array keys whose first item is not expanded in the detailed view.
COLLAPSED_ARRAY_KEYS: frozenset[str] = frozenset({"events", "launches"})

# -- Database ---------------------------------------------------------------
DEFAULT_DATABASE_URL: str = "sqlite:///spaceflight_news.db"
