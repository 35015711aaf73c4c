"""Assessment catalog, question delivery and submission endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .api_models import (
    AssessmentPayload,
    CompletedAssessmentPayload,
    QuestionPayload,
    QuestionResultPayload,
    SubmitAssessmentRequest,
    SubmitAssessmentResponse,
)
from .assessment_catalog import default_questions
from .db.models import AssessmentModel
from .db.session import get_session_dependency
from .dependencies import require_user_id
from .records import DEFAULT_ASSESSMENT_TITLE, Question
from .repositories import assessments
from .scoring import is_pass, score_assessment, score_percent
from .telemetry import ASSESSMENT_SUBMITTED, emit_event


router = APIRouter(prefix="/api", tags=["assessments"])
logger = logging.getLogger(__name__)


def _require_assessment(session: Session, assessment_id: str) -> AssessmentModel:
    assessment = assessments.get_assessment(session, assessment_id)
    if assessment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assessment not found")
    return assessment


def _questions_for(session: Session, assessment_id: str) -> List[Question]:
    questions = assessments.list_questions(session, assessment_id)
    return questions or default_questions()


@router.get("/assessments", response_model=List[AssessmentPayload])
def list_assessments(session: Session = Depends(get_session_dependency)) -> List[AssessmentPayload]:
    return [
        AssessmentPayload(
            id=model.id,
            title=model.title,
            description=model.description,
            category=model.category,
            difficulty_level=model.difficulty_level,
            duration_minutes=model.duration_minutes,
        )
        for model in assessments.list_assessments(session)
    ]


@router.get("/assessments/{assessment_id}/questions", response_model=List[QuestionPayload])
def list_questions(assessment_id: str, session: Session = Depends(get_session_dependency)) -> List[QuestionPayload]:
    _require_assessment(session, assessment_id)
    # Answer keys stay server-side.
    return [
        QuestionPayload(
            id=question.id,
            question_text=question.question_text,
            question_type=question.question_type,
            options=list(question.options),
            points=question.points,
            order_number=question.order_number,
        )
        for question in _questions_for(session, assessment_id)
    ]


@router.post("/users/{user_id}/assessments/{assessment_id}/submit", response_model=SubmitAssessmentResponse)
def submit_assessment(
    assessment_id: str,
    request: SubmitAssessmentRequest,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session_dependency),
) -> SubmitAssessmentResponse:
    assessment = _require_assessment(session, assessment_id)
    result = score_assessment(_questions_for(session, assessment_id), request.answers)
    attempt = assessments.record_attempt(
        session,
        user_id,
        assessment.id,
        score=result.score,
        total_points=result.total_points,
        time_taken_minutes=assessment.duration_minutes,
    )
    emit_event(
        ASSESSMENT_SUBMITTED,
        user_id=user_id,
        assessment_id=assessment.id,
        score=result.score,
        total_points=result.total_points,
    )
    return SubmitAssessmentResponse(
        attempt_id=attempt.id,
        score=result.score,
        total_points=result.total_points,
        percent=result.percent,
        passed=result.passed,
        results=[
            QuestionResultPayload(
                question_id=item.question_id,
                selected=item.selected,
                correct_answer=item.correct_answer,
                is_correct=item.is_correct,
            )
            for item in result.results
        ],
    )


@router.get("/users/{user_id}/assessments/completed", response_model=List[CompletedAssessmentPayload])
def list_completed(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session_dependency),
) -> List[CompletedAssessmentPayload]:
    return [
        CompletedAssessmentPayload(
            attempt_id=attempt.id,
            assessment_id=attempt.assessment_id,
            title=attempt.assessment.title if attempt.assessment else DEFAULT_ASSESSMENT_TITLE,
            score=attempt.score,
            total_points=attempt.total_points,
            percent=score_percent(attempt.score, attempt.total_points),
            passed=is_pass(attempt.score, attempt.total_points),
            completed_at=attempt.completed_at,
        )
        for attempt in assessments.list_user_attempts(session, user_id)
    ]


__all__ = ["router"]
