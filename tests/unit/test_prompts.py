import pytest

from viva.models import Difficulty, Message
from viva.prompts import (
    PromptKind,
    build_prompt,
    followup_prompt,
    opening_prompt,
    report_prompt,
    serialize_transcript,
)

TRANSCRIPT = [
    Message(role="assistant", content="What is a stack?"),
    Message(role="user", content="A stack is LIFO"),
]


def test_opening_prompt_names_topic_and_difficulty():
    prompt = opening_prompt("Templates", Difficulty.HARD)
    assert "Hard level interview" in prompt
    assert "Ask your first question about Templates" in prompt
    assert "[First Question]:" in prompt


def test_transcript_serialization_keeps_order_and_speakers():
    assert serialize_transcript(TRANSCRIPT) == "Interviewer: What is a stack?\nCandidate: A stack is LIFO"


def test_followup_prompt_replays_transcript_and_latest_answer():
    prompt = followup_prompt("Data Structures", Difficulty.EASY, TRANSCRIPT, "Queues are FIFO")
    assert "Easy level interview about Data Structures" in prompt
    assert "Interviewer: What is a stack?\nCandidate: A stack is LIFO" in prompt
    assert "Candidate's latest response: Queues are FIFO" in prompt
    assert "[Next Question]:" in prompt


def test_report_prompt_requests_json_schema():
    prompt = report_prompt("Algorithms", Difficulty.MEDIUM, TRANSCRIPT)
    assert '"strengths": ["strength1", "strength2"]' in prompt
    assert '"overallPerformance"' in prompt
    assert "Candidate: A stack is LIFO" in prompt
    assert "Consider the difficulty level (Medium)" in prompt


def test_braces_in_answers_are_kept_verbatim():
    transcript = [Message(role="user", content="template<class T> struct S { T v; };")]
    assert "struct S { T v; };" in report_prompt("Templates", Difficulty.EASY, transcript)


def test_build_prompt_is_deterministic():
    first = build_prompt(PromptKind.REPORT, topic="STL Library", difficulty=Difficulty.EASY, transcript=TRANSCRIPT)
    second = build_prompt(PromptKind.REPORT, topic="STL Library", difficulty=Difficulty.EASY, transcript=TRANSCRIPT)
    assert first == second


def test_build_prompt_follow_up_requires_answer():
    with pytest.raises(ValueError):
        build_prompt(PromptKind.FOLLOW_UP, topic="Algorithms", difficulty=Difficulty.EASY, transcript=TRANSCRIPT)
