"""Shared type definitions for the mock viva."""
from __future__ import annotations

from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

Role = Literal["user", "assistant"]

TOPICS = (
    "C++ Basics",
    "Object-Oriented Programming",
    "Data Structures",
    "Algorithms",
    "Memory Management",
    "STL Library",
    "Exception Handling",
    "File Handling",
    "Templates",
    "Multithreading",
)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


DEFAULT_DIFFICULTY = Difficulty.MEDIUM


class Phase(str, Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    ENDED = "Ended"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class Report(BaseModel):
    """End-of-session scoring produced from the model's JSON reply."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    strengths: List[StrictStr] = Field(min_length=2)
    improvements: List[StrictStr] = Field(min_length=2)
    overallPerformance: StrictStr
    score: StrictInt = Field(ge=0, le=100)


class InterviewSession(BaseModel):
    """Persisted history record, created once when a viva ends."""

    model_config = ConfigDict(frozen=True)

    id: str
    topic: str
    date: str
    duration: int = Field(ge=0)
    score: int = Field(ge=0, le=100)
    difficulty: Difficulty


def format_duration(seconds: int) -> str:
    """Render seconds as ``m:ss``."""

    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


__all__ = [
    "DEFAULT_DIFFICULTY",
    "Difficulty",
    "InterviewSession",
    "Message",
    "Phase",
    "Report",
    "Role",
    "TOPICS",
    "format_duration",
]
