"""Configuration package for the mock viva services."""
from .routes import (
    CHECK_CODE_GENERATION,
    QUESTION_GENERATION,
    RUN_CODE_GENERATION,
    TUTOR_GENERATION,
    VIVA_GENERATION,
    CompletionRoute,
    GenerationConfig,
    route_from_settings,
)
from .settings import Settings, settings

__all__ = [
    "CHECK_CODE_GENERATION",
    "QUESTION_GENERATION",
    "RUN_CODE_GENERATION",
    "TUTOR_GENERATION",
    "VIVA_GENERATION",
    "CompletionRoute",
    "GenerationConfig",
    "route_from_settings",
    "Settings",
    "settings",
]
