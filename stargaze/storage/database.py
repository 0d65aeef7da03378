"""SQLite connection manager with WAL mode and migration support."""

import importlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_PACKAGE = "stargaze.storage.migrations"
DEFAULT_TIMEOUT_SECONDS = 5.0


def connect(
    db_path: str | Path, timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> sqlite3.Connection:
    """Open a SQLite connection with WAL mode enabled.

    ``timeout`` bounds how long a statement waits on another writer's lock
    before failing with ``sqlite3.OperationalError``.
    """
    path = Path(db_path)
    if str(db_path) != ":memory:":
        path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=timeout, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def applied_versions(conn: sqlite3.Connection) -> set[str]:
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_versions ("
        "  version TEXT PRIMARY KEY,"
        "  applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP"
        ")"
    )
    return {row[0] for row in conn.execute("SELECT version FROM schema_versions")}


def run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending ``v###_*`` migrations in name order.

    Each migration and its version row commit together. Returns the names
    applied by this call.
    """
    done = applied_versions(conn)
    pending = [name for name in _discover_migrations() if name not in done]
    for name in pending:
        module = importlib.import_module(f"{MIGRATIONS_PACKAGE}.{name}")
        with conn:
            module.up(conn)
            conn.execute("INSERT INTO schema_versions (version) VALUES (?)", (name,))
        logger.info("Applied migration %s", name)
    return pending


def _discover_migrations() -> list[str]:
    """Discover migration modules by naming convention v###_*.py."""
    migrations_dir = Path(__file__).parent / "migrations"
    return sorted(p.stem for p in migrations_dir.glob("v[0-9]*_*.py"))
