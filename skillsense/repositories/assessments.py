"""Assessment definitions, questions and scored attempts."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..db.models import AssessmentModel, AssessmentQuestionModel, UserAssessmentModel
from ..records import AssessmentAttempt, Question
from ._common import normalize_user_id


class AssessmentRepository:
    def list_assessments(self, session: Session) -> List[AssessmentModel]:
        stmt = select(AssessmentModel).order_by(AssessmentModel.created_at.desc())
        return list(session.execute(stmt).scalars().all())

    def get_assessment(self, session: Session, assessment_id: str) -> Optional[AssessmentModel]:
        return session.get(AssessmentModel, assessment_id)

    def list_questions(self, session: Session, assessment_id: str) -> List[Question]:
        stmt = (
            select(AssessmentQuestionModel)
            .where(AssessmentQuestionModel.assessment_id == assessment_id)
            .order_by(AssessmentQuestionModel.order_number.asc())
        )
        return [
            Question(
                id=model.id,
                question_text=model.question_text,
                question_type=model.question_type,
                options=list(model.options or []),
                correct_answer=model.correct_answer,
                points=model.points,
                order_number=model.order_number,
            )
            for model in session.execute(stmt).scalars().all()
        ]

    def record_attempt(
        self,
        session: Session,
        user_id: str,
        assessment_id: str,
        *,
        score: int,
        total_points: int,
        time_taken_minutes: Optional[int] = None,
        completed_at: Optional[datetime] = None,
    ) -> UserAssessmentModel:
        if score < 0 or total_points < 0:
            raise ValueError("Score and total points cannot be negative.")
        if score > total_points:
            raise ValueError("Score cannot exceed total points.")
        model = UserAssessmentModel(
            user_id=normalize_user_id(user_id),
            assessment_id=assessment_id,
            score=score,
            total_points=total_points,
            time_taken_minutes=time_taken_minutes,
        )
        if completed_at is not None:
            model.completed_at = completed_at
        session.add(model)
        session.flush()
        return model

    def list_user_attempts(self, session: Session, user_id: str) -> List[UserAssessmentModel]:
        normalized = normalize_user_id(user_id)
        stmt = (
            select(UserAssessmentModel)
            .options(selectinload(UserAssessmentModel.assessment))
            .where(UserAssessmentModel.user_id == normalized)
            .order_by(UserAssessmentModel.completed_at.desc())
        )
        return list(session.execute(stmt).scalars().all())

    def fetch_user_assessment_attempts(self, session: Session, user_id: str) -> List[AssessmentAttempt]:
        """Scored attempts for ``user_id``, most recent first."""
        normalized = normalize_user_id(user_id)
        stmt = (
            select(UserAssessmentModel, AssessmentModel.title)
            .outerjoin(AssessmentModel, AssessmentModel.id == UserAssessmentModel.assessment_id)
            .where(UserAssessmentModel.user_id == normalized)
            .order_by(UserAssessmentModel.completed_at.desc())
        )
        return [
            AssessmentAttempt(
                assessment_title=title,
                completed_at=row.completed_at,
                score=row.score,
                total_points=row.total_points,
            )
            for row, title in session.execute(stmt).all()
        ]


assessments = AssessmentRepository()

__all__ = ["AssessmentRepository", "assessments"]
