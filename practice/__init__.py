from __future__ import annotations  # Coding practice package exports

from .bank import EASY_QUESTIONS, random_question
from .models import STARTER_CODE, CaseResult, CheckReport, CodingQuestion, TestCase
from .runner import PracticeCompletions, bind_practice, check_solution, generate_question, run_code

__all__ = [
    "EASY_QUESTIONS",
    "STARTER_CODE",
    "CaseResult",
    "CheckReport",
    "CodingQuestion",
    "PracticeCompletions",
    "TestCase",
    "bind_practice",
    "check_solution",
    "generate_question",
    "random_question",
    "run_code",
]
