from __future__ import annotations  # C++ tutor package exports

from .models import QUESTIONNAIRE, CoursePreferences, QuestionnaireItem
from .preferences import PREFERENCES_KEY, PreferenceStore
from .session import ROADMAP_ERROR, ROADMAP_REQUEST, TURN_ERROR, TutorSession

__all__ = [
    "PREFERENCES_KEY",
    "QUESTIONNAIRE",
    "ROADMAP_ERROR",
    "ROADMAP_REQUEST",
    "TURN_ERROR",
    "CoursePreferences",
    "PreferenceStore",
    "QuestionnaireItem",
    "TutorSession",
]
