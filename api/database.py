"""
Database connection management for the lookup API.

Provides a get_db() dependency that opens a per-request SQLite connection and
closes it after the response is sent.  The database path is resolved once at
startup from the APP_DB_PATH environment variable (default:
organisations.sqlite) and can be overridden by ``create_app(db_path=...)``.

The only table is ``organisations(id TEXT PRIMARY KEY, name TEXT NOT NULL)``.
"""

import logging
import sqlite3
from collections.abc import Generator, Iterable
from pathlib import Path

from fastapi import HTTPException

from utils.config import AppConfig

logger = logging.getLogger(__name__)

_DB_PATH: Path = AppConfig.from_env().db_path

SCHEMA = """
CREATE TABLE IF NOT EXISTS organisations (
    id   TEXT PRIMARY KEY,
    name TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_organisations_name ON organisations (name COLLATE NOCASE);
"""


def get_db_path() -> Path:
    """Return the configured database path."""
    return _DB_PATH


def set_db_path(db_path: Path) -> None:
    global _DB_PATH
    _DB_PATH = Path(db_path)


def _make_conn(db_path: Path, read_only: bool = False) -> sqlite3.Connection:
    """Open a single SQLite connection with standard pragmas.

    Args:
        db_path: Path to the SQLite database file.
        read_only: If True, open in read-only mode via a SQLite URI.
    """
    if read_only:
        conn = sqlite3.connect(f"file:{db_path}?mode=ro", uri=True,
                               check_same_thread=False, timeout=10)
    else:
        conn = sqlite3.connect(str(db_path), check_same_thread=False, timeout=10)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA busy_timeout=5000")
    return conn


def init_db(db_path: Path, organisations: Iterable[tuple[str, str]] = ()) -> int:
    """Create the schema at *db_path* and upsert ``(id, name)`` rows.

    Returns:
        Number of rows in the table afterwards.
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = _make_conn(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.executemany(
            "INSERT OR REPLACE INTO organisations (id, name) VALUES (?, ?)",
            list(organisations),
        )
        conn.commit()
        count = conn.execute("SELECT COUNT(*) FROM organisations").fetchone()[0]
    finally:
        conn.close()
    logger.info("Initialised %s with %d organisations", db_path, count)
    return count


def get_db() -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: yield a read-only SQLite connection, close on exit.

    Raises HTTP 503 with a friendly message if the database file is missing,
    instead of a cryptic SQLite error.

    Usage in a route::

        from api.database import get_db
        from fastapi import Depends

        @router.get("/example")
        def example(conn=Depends(get_db)):
            ...
    """
    if not _DB_PATH.exists():
        raise HTTPException(
            status_code=503,
            detail=f"Database not found at '{_DB_PATH}'. Run 'python -m api.seed' to build it.",
        )
    conn = _make_conn(_DB_PATH, read_only=True)
    try:
        yield conn
    finally:
        conn.close()
