"""Coding practice domain models."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from viva.models import Difficulty


class TestCase(BaseModel):
    __test__ = False  # not a pytest class

    input: str
    output: str


class CodingQuestion(BaseModel):
    title: str
    description: str
    difficulty: Difficulty = Difficulty.EASY
    sampleInput: str
    sampleOutput: str
    testCases: List[TestCase] = Field(min_length=1)
    solution: str


class CaseResult(BaseModel):
    index: int
    passed: bool
    verdict: str


class CheckReport(BaseModel):
    results: List[CaseResult]

    @property
    def all_passed(self) -> bool:
        return bool(self.results) and all(result.passed for result in self.results)

    def summary(self) -> str:
        lines = [
            f"Test Case {result.index}: {'PASSED' if result.passed else 'FAILED'}"
            for result in self.results
        ]
        return "\n".join(lines)


STARTER_CODE = """#include <iostream>
using namespace std;

int main() {
    // Your code here

    return 0;
}"""


__all__ = ["STARTER_CODE", "CaseResult", "CheckReport", "CodingQuestion", "TestCase"]
