"""Engine construction for the migration commands."""

from sqlalchemy import Engine, create_engine, event

from spaceflight_news.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_url: str | None = None) -> Engine:
    """Create an engine for ``database_url`` (default: settings.database_url).

    SQLite connections get foreign key enforcement switched on so the
    cascade rules behave as on other backends.
    """
    engine = create_engine(database_url or get_settings().database_url)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine
