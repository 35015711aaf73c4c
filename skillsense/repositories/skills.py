"""Database-backed skill catalog and per-user skill repository."""

from __future__ import annotations

from typing import Dict, List, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.models import ResumeUploadModel, SkillModel, UserSkillModel
from ..records import CandidateSkill, SkillRecord
from ..skill_extraction import ExtractedSkill
from ._common import normalize_user_id


class SkillRepository:
    def fetch_user_skills(self, session: Session, user_id: str) -> List[SkillRecord]:
        """Skills held by ``user_id`` with name and category joined flat."""
        normalized = normalize_user_id(user_id)
        stmt = (
            select(UserSkillModel, SkillModel.name, SkillModel.category)
            .outerjoin(SkillModel, SkillModel.id == UserSkillModel.skill_id)
            .where(UserSkillModel.user_id == normalized)
            .order_by(UserSkillModel.proficiency_level.desc(), UserSkillModel.created_at.asc())
        )
        records: List[SkillRecord] = []
        for row, name, category in session.execute(stmt).all():
            records.append(
                SkillRecord(
                    skill_id=row.skill_id,
                    skill_name=name,
                    category=category,
                    proficiency_level=row.proficiency_level,
                    source=row.source,
                )
            )
        return records

    def list_candidate_skills(self, session: Session, limit: int) -> List[CandidateSkill]:
        stmt = select(SkillModel).order_by(SkillModel.created_at.asc(), SkillModel.name.asc()).limit(limit)
        return [
            CandidateSkill(id=model.id, name=model.name, category=model.category)
            for model in session.execute(stmt).scalars().all()
        ]

    def upsert_user_skills(self, session: Session, extracted: Sequence[ExtractedSkill]) -> int:
        """Insert or refresh rows, unique on ``(user_id, skill_id)``."""
        if not extracted:
            return 0
        by_key: Dict[tuple[str, str], ExtractedSkill] = {
            (normalize_user_id(item.user_id), item.skill_id): item for item in extracted
        }
        user_ids = {user_id for user_id, _ in by_key}
        skill_ids = {skill_id for _, skill_id in by_key}
        stmt = select(UserSkillModel).where(
            UserSkillModel.user_id.in_(user_ids),
            UserSkillModel.skill_id.in_(skill_ids),
        )
        existing = {(model.user_id, model.skill_id): model for model in session.execute(stmt).scalars().all()}

        for key, item in by_key.items():
            model = existing.get(key)
            if model is None:
                session.add(
                    UserSkillModel(
                        user_id=key[0],
                        skill_id=key[1],
                        proficiency_level=item.proficiency_level,
                        source=item.source,
                    )
                )
            else:
                model.proficiency_level = item.proficiency_level
                model.source = item.source
        session.flush()
        return len(by_key)

    def record_resume_upload(self, session: Session, user_id: str, file_name: str, extracted_count: int) -> str:
        model = ResumeUploadModel(
            user_id=normalize_user_id(user_id),
            file_name=file_name,
            file_url="#",
            parsed_data={"extracted_skills": extracted_count},
        )
        session.add(model)
        session.flush()
        return model.id


skills = SkillRepository()

__all__ = ["SkillRepository", "skills"]
