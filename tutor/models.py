"""C++ course questionnaire and the learner preferences it produces."""
from __future__ import annotations

from typing import Literal, Mapping, NamedTuple, Tuple, get_args

from pydantic import BaseModel, ConfigDict

Experience = Literal["No experience", "Some experience", "Experienced programmer"]
CppLevel = Literal["Beginner", "Intermediate", "Expert"]
StudyTime = Literal["1-2 hours", "3-5 hours", "5+ hours"]
LearningGoal = Literal["Academic requirement", "Competitive programming", "Software development", "Game development"]
LearningStyle = Literal["Video tutorials", "Reading documentation", "Practice problems", "Interactive coding"]


class QuestionnaireItem(NamedTuple):
    id: str
    question: str
    options: Tuple[str, ...]


QUESTIONNAIRE: Tuple[QuestionnaireItem, ...] = (
    QuestionnaireItem(
        "programming_experience",
        "Do you have any prior programming experience?",
        get_args(Experience),
    ),
    QuestionnaireItem("cpp_level", "How would you rate your C++ knowledge?", get_args(CppLevel)),
    QuestionnaireItem(
        "study_time",
        "How many hours per week can you dedicate to learning?",
        get_args(StudyTime),
    ),
    QuestionnaireItem("learning_goal", "What is your primary goal for learning C++?", get_args(LearningGoal)),
    QuestionnaireItem("preferred_learning", "What is your preferred learning style?", get_args(LearningStyle)),
)


class CoursePreferences(BaseModel):
    """Answers to the five questionnaire items; every field must be one of its listed options."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    programming_experience: Experience
    cpp_level: CppLevel
    study_time: StudyTime
    learning_goal: LearningGoal
    preferred_learning: LearningStyle

    @classmethod
    def from_answers(cls, answers: Mapping[str, str]) -> "CoursePreferences":
        return cls.model_validate(dict(answers))

    def background(self) -> str:
        return "\n".join(
            [
                "Student Background:",
                f"- Programming Experience: {self.programming_experience}",
                f"- C++ Knowledge Level: {self.cpp_level}",
                f"- Available Study Time: {self.study_time}",
                f"- Learning Goal: {self.learning_goal}",
                f"- Preferred Learning Style: {self.preferred_learning}",
            ]
        )


__all__ = ["QUESTIONNAIRE", "CoursePreferences", "QuestionnaireItem"]
