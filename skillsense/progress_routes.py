"""Per-user progress and skill endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .api_models import (
    ActivityPayload,
    AnalyzeRequest,
    AnalyzeResponse,
    CategoryBreakdownPayload,
    ProgressPayload,
    StatsPayload,
    UserSkillPayload,
)
from .db.session import get_session_dependency, session_scope
from .dependencies import require_user_id
from .progress import activity_label, category_percentages, proficiency_label
from .progress_service import ProgressLoadError, load_progress
from .records import OTHER_CATEGORY, ProgressReport, SkillRecord
from .repositories import skills
from .skill_analysis import AnalysisInputError, analyze_profile


router = APIRouter(prefix="/api/users/{user_id}", tags=["progress"])
logger = logging.getLogger(__name__)

ANALYSIS_COMPLETE_MESSAGE = "Analysis complete! Skills have been extracted and added to your profile."


def _progress_payload(user_id: str, report: ProgressReport) -> ProgressPayload:
    stats = report.stats
    shares = category_percentages(report.category_counts, stats.total_skills)
    return ProgressPayload(
        user_id=user_id,
        stats=StatsPayload(**stats.model_dump()),
        category_counts=dict(report.category_counts),
        categories=[
            CategoryBreakdownPayload(category=category, count=count, percentage=shares.get(category, 0.0))
            for category, count in report.category_counts.items()
        ],
        activity=[
            ActivityPayload(
                kind=item.kind,
                label=activity_label(item.kind),
                title=item.title,
                date=item.date,
                score_percent=item.score_percent,
            )
            for item in report.activity
        ],
    )


def _skill_payload(record: SkillRecord) -> UserSkillPayload:
    return UserSkillPayload(
        skill_id=record.skill_id,
        name=record.skill_name,
        category=record.category or OTHER_CATEGORY,
        proficiency_level=record.proficiency_level,
        proficiency_label=proficiency_label(record.proficiency_level),
        source=record.source,
    )


@router.get("/progress", response_model=ProgressPayload)
def get_progress(user_id: str = Depends(require_user_id)) -> ProgressPayload:
    try:
        report = load_progress(user_id)
    except ProgressLoadError as exc:
        logger.error("Error loading progress data: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Unable to load progress") from exc
    return _progress_payload(user_id, report)


@router.get("/skills", response_model=List[UserSkillPayload])
def list_user_skills(user_id: str = Depends(require_user_id)) -> List[UserSkillPayload]:
    with session_scope(commit=False) as session:
        records = skills.fetch_user_skills(session, user_id)
    return [_skill_payload(record) for record in records]


@router.post("/skills/analyze", response_model=AnalyzeResponse)
def analyze_skills(
    request: AnalyzeRequest,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session_dependency),
) -> AnalyzeResponse:
    try:
        outcome = analyze_profile(
            user_id,
            resume_file_name=request.resume_file_name,
            linkedin_url=request.linkedin_url,
            session=session,
        )
    except AnalysisInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AnalyzeResponse(
        message=ANALYSIS_COMPLETE_MESSAGE,
        source=outcome.source,
        extracted_count=outcome.extracted_count,
        skills=[_skill_payload(record) for record in outcome.skills],
    )


__all__ = ["router"]
