"""Mock viva: interviewer prompts, report parsing and the session controller.

``viva.controller`` and ``viva.events`` are imported directly by callers.
"""
from .errors import ReportFormatError
from .models import (
    DEFAULT_DIFFICULTY,
    TOPICS,
    Difficulty,
    InterviewSession,
    Message,
    Phase,
    Report,
    format_duration,
)
from .prompts import PromptKind, build_prompt
from .report_parser import ReportResult, parse_report, parse_report_or_raise

__all__ = [
    "DEFAULT_DIFFICULTY",
    "TOPICS",
    "Difficulty",
    "InterviewSession",
    "Message",
    "Phase",
    "PromptKind",
    "Report",
    "ReportFormatError",
    "ReportResult",
    "build_prompt",
    "format_duration",
    "parse_report",
    "parse_report_or_raise",
]
