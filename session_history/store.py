from __future__ import annotations  # Bounded viva history persisted in key-value storage

import json
import logging
from typing import List, Protocol

from pydantic import TypeAdapter, ValidationError

from storage import KeyValueStore
from viva.models import InterviewSession

logger = logging.getLogger(__name__)

HISTORY_KEY = "vivaHistory"
HISTORY_LIMIT = 10

_SESSIONS = TypeAdapter(List[InterviewSession])


class HistoryStore(Protocol):  # Persistence port injected into the session controller
    def load(self) -> List[InterviewSession]: ...

    def append(self, session: InterviewSession) -> List[InterviewSession]: ...


class LocalHistoryStore:  # JSON array under one key, most recent first
    def __init__(self, storage: KeyValueStore, *, key: str = HISTORY_KEY, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be positive")
        self._storage = storage
        self._key = key
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    def load(self) -> List[InterviewSession]:  # Missing or corrupt data reads as empty
        raw = self._storage.get(self._key)
        if raw is None:
            return []
        try:
            return _SESSIONS.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, RecursionError) as exc:
            logger.warning("Ignoring malformed history under key=%s: %s", self._key, exc)
            return []

    def append(self, session: InterviewSession) -> List[InterviewSession]:  # Prepend, truncate, write back
        sessions = [session, *self.load()][: self._limit]
        self._storage.set(self._key, _SESSIONS.dump_json(sessions).decode("utf-8"))
        return sessions

    def clear(self) -> None:
        self._storage.remove(self._key)


__all__ = ["HISTORY_KEY", "HISTORY_LIMIT", "HistoryStore", "LocalHistoryStore"]
