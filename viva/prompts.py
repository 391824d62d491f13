"""Prompt templates for the mock viva interviewer."""
from __future__ import annotations

from enum import Enum
from textwrap import dedent
from typing import Optional, Sequence

from .models import Difficulty, Message


class PromptKind(str, Enum):
    OPENING = "opening"
    FOLLOW_UP = "follow_up"
    REPORT = "report"


_OPENING = dedent(
    """
    You are an experienced C++ technical interviewer conducting a {difficulty} level interview. Follow these rules:
    1. Start with a brief introduction of yourself
    2. Ask your first question about {topic}
    3. The question should be appropriate for {difficulty} level
    4. Focus on conceptual understanding and practical applications
    5. Keep your response concise and clear

    Format your response as:
    [Introduction]: (your brief introduction)
    [First Question]: (your question)
    """
).strip()

_FOLLOW_UP = dedent(
    """
    Context: You are a C++ technical interviewer conducting a {difficulty} level interview about {topic}.

    Previous conversation:
    {transcript}

    Candidate's latest response: {answer}

    Rules:
    1. Maintain context of the entire conversation
    2. Evaluate the candidate's last response
    3. Provide brief, constructive feedback
    4. Ask the next question at {difficulty} level
    5. Keep responses focused and clear

    Format your response as:
    [Feedback]: (brief feedback on the last answer)
    [Next Question]: (your next question)
    """
).strip()

_REPORT = dedent(
    """
    You are a C++ technical interviewer. Analyze this {difficulty} level interview about {topic}.

    Interview conversation:
    {transcript}

    Generate a performance report in valid JSON format with this exact structure:
    {{
      "strengths": ["strength1", "strength2"],
      "improvements": ["area1", "area2"],
      "overallPerformance": "detailed feedback",
      "score": 75
    }}

    Rules:
    1. Response must be valid JSON
    2. Score should be an integer between 0-100
    3. Consider the difficulty level ({difficulty}) when scoring
    4. Include at least 2 strengths and 2 improvements
    5. Provide detailed overall performance feedback
    """
).strip()


def serialize_transcript(messages: Sequence[Message]) -> str:
    speakers = {"assistant": "Interviewer", "user": "Candidate"}
    return "\n".join(f"{speakers[message.role]}: {message.content}" for message in messages)


def opening_prompt(topic: str, difficulty: Difficulty) -> str:
    return _OPENING.format(topic=topic, difficulty=difficulty.value)


def followup_prompt(topic: str, difficulty: Difficulty, transcript: Sequence[Message], answer: str) -> str:
    """``transcript`` is the conversation before ``answer`` was given."""

    return _FOLLOW_UP.format(
        topic=topic,
        difficulty=difficulty.value,
        transcript=serialize_transcript(transcript),
        answer=answer,
    )


def report_prompt(topic: str, difficulty: Difficulty, transcript: Sequence[Message]) -> str:
    return _REPORT.format(topic=topic, difficulty=difficulty.value, transcript=serialize_transcript(transcript))


def build_prompt(
    kind: PromptKind,
    *,
    topic: str,
    difficulty: Difficulty,
    transcript: Sequence[Message] = (),
    answer: Optional[str] = None,
) -> str:
    if kind is PromptKind.OPENING:
        return opening_prompt(topic, difficulty)
    if kind is PromptKind.FOLLOW_UP:
        if answer is None:
            raise ValueError("follow-up prompt needs the latest answer")
        return followup_prompt(topic, difficulty, transcript, answer)
    return report_prompt(topic, difficulty, transcript)


__all__ = [
    "PromptKind",
    "build_prompt",
    "followup_prompt",
    "opening_prompt",
    "report_prompt",
    "serialize_transcript",
]
