"""Multiple-choice assessment scoring."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .progress import percentage
from .records import Question

PASS_THRESHOLD = 0.70


class QuestionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    selected: Optional[str] = None
    correct_answer: str
    points: int
    is_correct: bool


class AssessmentScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = 0
    total_points: int = 0
    results: List[QuestionResult] = Field(default_factory=list)

    @property
    def percent(self) -> int:
        return score_percent(self.score, self.total_points)

    @property
    def passed(self) -> bool:
        return is_pass(self.score, self.total_points)


def score_assessment(questions: Sequence[Question], answers: Mapping[str, str]) -> AssessmentScore:
    """Sum the points of every exactly-matching answer.

    Matching is case-sensitive with no normalisation and no partial credit.
    Questions missing from ``answers`` score zero but still count toward
    ``total_points``.
    """
    score = 0
    total_points = 0
    results: List[QuestionResult] = []
    for question in questions:
        total_points += question.points
        selected = answers.get(question.id)
        correct = selected is not None and selected == question.correct_answer
        if correct:
            score += question.points
        results.append(
            QuestionResult(
                question_id=question.id,
                selected=selected,
                correct_answer=question.correct_answer,
                points=question.points,
                is_correct=correct,
            )
        )
    return AssessmentScore(score=score, total_points=total_points, results=results)


def is_pass(score: int, total_points: int) -> bool:
    """Presentation threshold only; stored scores are never altered."""
    if total_points <= 0:
        return False
    return score / total_points >= PASS_THRESHOLD


def score_percent(score: int, total_points: int) -> int:
    return percentage(score, total_points)


__all__ = [
    "AssessmentScore",
    "PASS_THRESHOLD",
    "QuestionResult",
    "is_pass",
    "score_assessment",
    "score_percent",
]
