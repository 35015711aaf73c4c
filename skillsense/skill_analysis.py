"""Resume / profile analysis flow built on a :class:`SkillExtractor`."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from pydantic import BaseModel
from sqlalchemy.orm import Session

from .config import get_settings
from .db.session import session_scope
from .records import SkillRecord
from .repositories import skills
from .skill_extraction import ExtractionSource, RandomSkillExtractor, SkillExtractor, resolve_source
from .telemetry import SKILLS_EXTRACTED, emit_event

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Please upload a resume or enter a LinkedIn URL"


class AnalysisInputError(ValueError):
    pass


class AnalysisOutcome(BaseModel):
    user_id: str
    source: str
    extracted_count: int
    resume_upload_id: Optional[str] = None
    skills: List[SkillRecord]


def default_extractor() -> SkillExtractor:
    return RandomSkillExtractor(assign_limit=get_settings().extraction_assign_limit)


def _store_extraction(
    session: Session,
    user_id: str,
    extractor: SkillExtractor,
    source: ExtractionSource,
    resume_file_name: Optional[str],
    candidate_limit: int,
) -> Tuple[int, Optional[str], List[SkillRecord]]:
    candidates = skills.list_candidate_skills(session, candidate_limit)
    count = skills.upsert_user_skills(session, extractor.extract(user_id, candidates, source))
    upload_id = None
    if resume_file_name:
        upload_id = skills.record_resume_upload(session, user_id, resume_file_name, count)
    return count, upload_id, skills.fetch_user_skills(session, user_id)


def analyze_profile(
    user_id: str,
    *,
    resume_file_name: Optional[str] = None,
    linkedin_url: Optional[str] = None,
    extractor: Optional[SkillExtractor] = None,
    session: Optional[Session] = None,
) -> AnalysisOutcome:
    """Extract skills for ``user_id`` and store them.

    With ``session`` the writes join the caller's transaction and are only
    flushed; otherwise a session is opened and committed here.
    """
    resume_file_name = (resume_file_name or "").strip() or None
    linkedin_url = (linkedin_url or "").strip() or None
    if not resume_file_name and not linkedin_url:
        raise AnalysisInputError(MISSING_INPUT_MESSAGE)

    extractor = extractor or default_extractor()
    source = resolve_source(resume_file_name)
    settings = get_settings()

    if session is None:
        with session_scope() as owned:
            count, upload_id, current = _store_extraction(
                owned, user_id, extractor, source, resume_file_name, settings.extraction_candidate_limit
            )
    else:
        count, upload_id, current = _store_extraction(
            session, user_id, extractor, source, resume_file_name, settings.extraction_candidate_limit
        )

    logger.info("Extracted %s skills for user_id=%s from %s", count, user_id, source)
    emit_event(SKILLS_EXTRACTED, user_id=user_id, source=source, extracted=count)
    return AnalysisOutcome(
        user_id=user_id,
        source=source,
        extracted_count=count,
        resume_upload_id=upload_id,
        skills=current,
    )


__all__ = [
    "AnalysisInputError",
    "AnalysisOutcome",
    "MISSING_INPUT_MESSAGE",
    "analyze_profile",
    "default_extractor",
]
