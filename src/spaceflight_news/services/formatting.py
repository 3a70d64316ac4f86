"""Rendering of executor results as JSON, a table, or a detailed dump.

Every renderer returns the output lines; the executor echoes them.
"""

import json
from typing import Any

from spaceflight_news.constants import (
    COLLAPSED_ARRAY_KEYS,
    TABLE_COLUMN_WIDTH,
    TABLE_PUBLISHED_MAX_CHARS,
    TABLE_TITLE_MAX_CHARS,
    TABLE_TITLE_WIDTH,
)

OUTPUT_FORMATS = ("json", "table", "detailed")


def is_paginated(data: Any) -> bool:
    return isinstance(data, dict) and "results" in data and "count" in data


def format_scalar(value: Any) -> str:
    """Render a JSON scalar for display: strings unquoted, JSON otherwise."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def render(data: Any, output_format: str, max_items: int) -> list[str]:
    """Dispatch on ``output_format``; unknown formats render detailed."""
    if output_format == "json":
        return render_json(data)
    if output_format == "table":
        return render_table(data, max_items)
    return render_detailed(data, max_items)


def render_json(data: Any) -> list[str]:
    return json.dumps(data, indent=2, ensure_ascii=False).splitlines()


# -- Table --------------------------------------------------------------------


def truncate_title(title: str) -> str:
    if len(title) > TABLE_TITLE_MAX_CHARS:
        return f"{title[:TABLE_TITLE_MAX_CHARS]}..."
    return title


def _cell(item: dict, key: str) -> str:
    value = item.get(key)
    return value if isinstance(value, str) else "N/A"


def table_row(title: str, news_site: str, published: str) -> str:
    return (
        f"  | {title:<{TABLE_TITLE_WIDTH}} "
        f"| {news_site:<{TABLE_COLUMN_WIDTH}} "
        f"| {published:<{TABLE_COLUMN_WIDTH}} |"
    )


def render_table(data: Any, max_items: int) -> list[str]:
    """Title / News Site / Published table over the results of a page.

    A single object renders as a one-row table; anything else renders
    nothing.
    """
    if is_paginated(data) and isinstance(data["results"], list):
        rows = data["results"]
    elif isinstance(data, dict):
        rows = [data]
    else:
        return []

    lines = [
        table_row("Title", "News Site", "Published"),
        "  |{}|{}|{}|".format(
            "-" * (TABLE_TITLE_WIDTH + 2),
            "-" * (TABLE_COLUMN_WIDTH + 2),
            "-" * (TABLE_COLUMN_WIDTH + 2),
        ),
    ]
    for item in rows[:max_items]:
        if not isinstance(item, dict):
            continue
        lines.append(
            table_row(
                truncate_title(_cell(item, "title")),
                _cell(item, "news_site"),
                _cell(item, "published_at")[:TABLE_PUBLISHED_MAX_CHARS],
            )
        )
    return lines


# -- Detailed -----------------------------------------------------------------


def render_object(value: Any, indent: int) -> list[str]:
    """Indented key/value dump of a JSON object."""
    pad = " " * indent
    if not isinstance(value, dict):
        return [f"{pad}{format_scalar(value)}"]

    lines = []
    for key, val in value.items():
        if isinstance(val, dict):
            lines.append(f"{pad}{key}:")
            lines.extend(render_object(val, indent + 2))
        elif isinstance(val, list):
            lines.append(f"{pad}{key}: [{len(val)} items]")
            if val and key not in COLLAPSED_ARRAY_KEYS:
                first = val[0]
                if isinstance(first, dict):
                    lines.append(f"{pad}  First item:")
                    lines.extend(render_object(first, indent + 4))
                else:
                    lines.append(f"{pad}  First item: {format_scalar(first)}")
        else:
            lines.append(f"{pad}{key}: {format_scalar(val)}")
    return lines


def render_detailed(data: Any, max_items: int) -> list[str]:
    if is_paginated(data):
        lines = []
        count = data["count"]
        if isinstance(count, int) and not isinstance(count, bool) and count >= 0:
            lines.append(f"  Total results: {count}")
        results = data["results"]
        if isinstance(results, list):
            shown = results[:max_items]
            lines.append(f"  Displaying first {len(shown)} items:")
            for i, item in enumerate(shown, 1):
                lines.append(f"    Item {i}:")
                lines.extend(render_object(item, 6))
        return lines

    if isinstance(data, dict):
        return ["  Response:", *render_object(data, 4)]
    return [f"  Response: {format_scalar(data)}"]
