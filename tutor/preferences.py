from __future__ import annotations  # Questionnaire answers persisted in key-value storage

import logging
from typing import Optional

from pydantic import ValidationError

from storage import KeyValueStore

from .models import CoursePreferences

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "cppCoursePreferences"


class PreferenceStore:  # One JSON object under one key; last writer wins
    def __init__(self, storage: KeyValueStore, *, key: str = PREFERENCES_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> Optional[CoursePreferences]:  # Missing or corrupt data reads as "not answered yet"
        raw = self._storage.get(self._key)
        if raw is None:
            return None
        try:
            return CoursePreferences.model_validate_json(raw)
        except (ValidationError, RecursionError) as exc:
            logger.warning("Ignoring malformed course preferences under key=%s: %s", self._key, exc)
            return None

    def save(self, preferences: CoursePreferences) -> None:
        self._storage.set(self._key, preferences.model_dump_json())

    def clear(self) -> None:
        self._storage.remove(self._key)


__all__ = ["PREFERENCES_KEY", "PreferenceStore"]
