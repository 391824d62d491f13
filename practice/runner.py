"""Coding practice helpers; the completion service simulates compiling and running."""
from __future__ import annotations

import logging
import random
from textwrap import dedent
from typing import NamedTuple, Optional

from pydantic import ValidationError

from config import CHECK_CODE_GENERATION, QUESTION_GENERATION, RUN_CODE_GENERATION, CompletionRoute
from llm_gateway import CompletionError, CompletionFn, HttpClient, bind_completion, strip_code_fences

from .bank import random_question
from .models import CaseResult, CheckReport, CodingQuestion

logger = logging.getLogger(__name__)

PASS = "PASS"

GENERATE_PROMPT = dedent(
    """
    Create a beginner-friendly C++ programming question with the following format:
    {
      "title": "A clear, concise title",
      "description": "Detailed problem description with clear input/output specifications",
      "sampleInput": "Example input",
      "sampleOutput": "Example output",
      "testCases": [
        {"input": "test input 1", "output": "expected output 1"},
        {"input": "test input 2", "output": "expected output 2"}
      ],
      "solution": "Complete C++ solution code"
    }
    Make sure the question is easy and suitable for beginners learning C++.
    Return only JSON without markdown fences, text, or commentary.
    """
).strip()


class PracticeCompletions(NamedTuple):
    run: CompletionFn
    check: CompletionFn
    generate: CompletionFn


def bind_practice(route: CompletionRoute, *, client: Optional[HttpClient] = None) -> PracticeCompletions:
    return PracticeCompletions(
        run=bind_completion(route, RUN_CODE_GENERATION, client=client),
        check=bind_completion(route, CHECK_CODE_GENERATION, client=client),
        generate=bind_completion(route, QUESTION_GENERATION, client=client),
    )


def run_prompt(code: str, stdin: str) -> str:
    return (
        "You are a C++ compiler. Execute this code and return ONLY the output:\n\n"
        f"{code}\n\nInput:\n{stdin}\n\n"
        "Return ONLY the program output, nothing else."
    )


def check_prompt(code: str, stdin: str, expected: str) -> str:
    return (
        "You are a C++ code tester. Compare the output of this code with the expected output.\n\n"
        f"Code:\n{code}\n\nInput:\n{stdin}\n\nExpected Output:\n{expected}\n\n"
        'Reply with EXACTLY "PASS" if the code produces the expected output, '
        'or "FAIL" if it doesn\'t. No other text.'
    )


async def run_code(code: str, stdin: str, *, complete: CompletionFn) -> str:
    """Return the simulated program output; raises ``CompletionError`` on failure."""

    output = await complete(run_prompt(code, stdin))
    return output.strip()


async def check_solution(code: str, question: CodingQuestion, *, complete: CompletionFn) -> CheckReport:
    """Grade ``code`` against every test case, one request per case."""

    results = []
    for index, case in enumerate(question.testCases, start=1):
        verdict = (await complete(check_prompt(code, case.input, case.output))).strip()
        results.append(CaseResult(index=index, passed=verdict == PASS, verdict=verdict))
    report = CheckReport(results=results)
    logger.info("Checked solution for %r passed=%s", question.title, report.all_passed)
    return report


async def generate_question(*, complete: CompletionFn, rng: Optional[random.Random] = None) -> CodingQuestion:
    """Ask for a fresh question; fall back to the built-in bank when that fails."""

    try:
        text = await complete(GENERATE_PROMPT)
        return CodingQuestion.model_validate_json(strip_code_fences(text))
    except CompletionError as exc:
        logger.warning("Question generation request failed: %s", exc)
    except ValidationError as exc:
        logger.warning("Generated question did not match schema: %s", exc)
    return random_question(rng)


__all__ = [
    "GENERATE_PROMPT",
    "PracticeCompletions",
    "bind_practice",
    "check_prompt",
    "check_solution",
    "generate_question",
    "run_code",
    "run_prompt",
]
