from __future__ import annotations  # Session history package exports

from config.settings import Settings, settings as default_settings
from storage import SqliteKeyValueStore

from .store import HISTORY_KEY, HISTORY_LIMIT, HistoryStore, LocalHistoryStore


def history_from_settings(cfg: Settings | None = None) -> LocalHistoryStore:  # SQLite-backed store at DB_PATH
    cfg = cfg or default_settings
    return LocalHistoryStore(SqliteKeyValueStore(cfg.DB_PATH), key=cfg.HISTORY_KEY, limit=cfg.HISTORY_LIMIT)


__all__ = ["HISTORY_KEY", "HISTORY_LIMIT", "HistoryStore", "LocalHistoryStore", "history_from_settings"]
