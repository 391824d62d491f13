"""Built-in beginner questions, used when no generated question is available."""
from __future__ import annotations

import random
from typing import Optional, Sequence

from .models import CodingQuestion, TestCase

EASY_QUESTIONS: Sequence[CodingQuestion] = (
    CodingQuestion(
        title="Sum of Two Numbers",
        description=(
            "Write a program to add two integers provided as input.\n\n"
            "Input Format:\nTwo space-separated integers a and b\n\n"
            "Output Format:\nA single integer representing the sum of a and b"
        ),
        sampleInput="5 3",
        sampleOutput="8",
        testCases=[
            TestCase(input="5 3", output="8"),
            TestCase(input="-1 7", output="6"),
            TestCase(input="0 0", output="0"),
        ],
        solution=(
            "#include <iostream>\nusing namespace std;\n\n"
            "int main() {\n    int a, b;\n    cin >> a >> b;\n    cout << a + b;\n    return 0;\n}"
        ),
    ),
    CodingQuestion(
        title="Even or Odd",
        description=(
            "Read an integer n and print EVEN if it is divisible by 2, otherwise ODD.\n\n"
            "Input Format:\nA single integer n\n\nOutput Format:\nEVEN or ODD"
        ),
        sampleInput="4",
        sampleOutput="EVEN",
        testCases=[
            TestCase(input="4", output="EVEN"),
            TestCase(input="7", output="ODD"),
            TestCase(input="-3", output="ODD"),
        ],
        solution=(
            "#include <iostream>\nusing namespace std;\n\n"
            "int main() {\n    int n;\n    cin >> n;\n"
            "    cout << (n % 2 == 0 ? \"EVEN\" : \"ODD\");\n    return 0;\n}"
        ),
    ),
)


def random_question(rng: Optional[random.Random] = None) -> CodingQuestion:
    return (rng or random).choice(list(EASY_QUESTIONS))


__all__ = ["EASY_QUESTIONS", "random_question"]
