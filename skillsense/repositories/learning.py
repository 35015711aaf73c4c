"""Learning resource catalog and per-user progress rows."""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..db.models import LearningResourceModel, SkillModel, UserLearningProgressModel
from ..records import STATUS_IN_PROGRESS, LearningProgressEntry
from ._common import normalize_user_id

ALL = "all"


def _is_active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


class LearningRepository:
    def list_resources(
        self,
        session: Session,
        *,
        category: Optional[str] = None,
        resource_type: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> List[LearningResourceModel]:
        """Catalog ordered by rating; ``None`` or ``"all"`` disables a filter."""
        stmt = select(LearningResourceModel).options(selectinload(LearningResourceModel.skill))
        if _is_active(category):
            stmt = stmt.join(SkillModel, SkillModel.id == LearningResourceModel.skill_id).where(
                SkillModel.category == category
            )
        if _is_active(resource_type):
            stmt = stmt.where(LearningResourceModel.resource_type == resource_type)
        if _is_active(difficulty):
            stmt = stmt.where(LearningResourceModel.difficulty_level == difficulty)
        stmt = stmt.order_by(LearningResourceModel.rating.desc().nulls_last(), LearningResourceModel.title.asc())
        return list(session.execute(stmt).scalars().all())

    def get_resource(self, session: Session, resource_id: str) -> Optional[LearningResourceModel]:
        return session.get(LearningResourceModel, resource_id)

    def start_resource(self, session: Session, user_id: str, resource_id: str) -> UserLearningProgressModel:
        """Mark a resource as in progress, resetting any earlier row for it."""
        normalized = normalize_user_id(user_id)
        stmt = select(UserLearningProgressModel).where(
            UserLearningProgressModel.user_id == normalized,
            UserLearningProgressModel.resource_id == resource_id,
        )
        model = session.execute(stmt).scalar_one_or_none()
        if model is None:
            model = UserLearningProgressModel(user_id=normalized, resource_id=resource_id)
            session.add(model)
        model.status = STATUS_IN_PROGRESS
        model.progress_percentage = 0
        session.flush()
        return model

    def progress_by_resource(self, session: Session, user_id: str) -> Dict[str, UserLearningProgressModel]:
        normalized = normalize_user_id(user_id)
        stmt = select(UserLearningProgressModel).where(UserLearningProgressModel.user_id == normalized)
        return {model.resource_id: model for model in session.execute(stmt).scalars().all()}

    def fetch_user_learning_progress(self, session: Session, user_id: str) -> List[LearningProgressEntry]:
        """Progress rows for ``user_id`` with resource title and duration, latest first."""
        normalized = normalize_user_id(user_id)
        stmt = (
            select(
                UserLearningProgressModel,
                LearningResourceModel.title,
                LearningResourceModel.duration_hours,
            )
            .outerjoin(LearningResourceModel, LearningResourceModel.id == UserLearningProgressModel.resource_id)
            .where(UserLearningProgressModel.user_id == normalized)
            .order_by(UserLearningProgressModel.started_at.desc())
        )
        return [
            LearningProgressEntry(
                resource_title=title,
                status=row.status,
                started_at=row.started_at,
                duration_hours=duration,
            )
            for row, title, duration in session.execute(stmt).all()
        ]


learning = LearningRepository()

__all__ = ["ALL", "LearningRepository", "learning"]
