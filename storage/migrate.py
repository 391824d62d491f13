"""SQLite schema migrations for the viva key-value store."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .sqlite import get_conn

logger = logging.getLogger(__name__)

# Each entry upgrades the schema by one version; PRAGMA user_version records how many ran.
MIGRATIONS: Sequence[str] = (
    """
CREATE TABLE IF NOT EXISTS kv_store (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
""",
)


def schema_version(db_path: Optional[str] = None) -> int:
    with get_conn(db_path) as conn:
        return int(conn.execute("PRAGMA user_version").fetchone()[0])


def migrate(db_path: Optional[str] = None) -> int:
    """Apply pending migrations; returns the resulting schema version."""

    with get_conn(db_path) as conn:
        current = int(conn.execute("PRAGMA user_version").fetchone()[0])
        for version, stmt in enumerate(MIGRATIONS[current:], start=current + 1):
            conn.executescript(stmt)
            conn.execute(f"PRAGMA user_version = {version}")
            logger.info("Applied storage migration %d", version)
    return max(current, len(MIGRATIONS))


if __name__ == "__main__":
    migrate()
