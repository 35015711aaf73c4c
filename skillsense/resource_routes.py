"""Learning resource catalog and per-user resource progress endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .api_models import ResourcePayload, ResourceProgressPayload
from .db.models import LearningResourceModel, UserLearningProgressModel
from .db.session import get_session_dependency
from .dependencies import require_user_id
from .repositories import learning
from .repositories.learning import ALL
from .telemetry import RESOURCE_STARTED, emit_event


router = APIRouter(prefix="/api", tags=["resources"])


def _resource_payload(model: LearningResourceModel) -> ResourcePayload:
    return ResourcePayload(
        id=model.id,
        title=model.title,
        description=model.description,
        resource_type=model.resource_type,
        url=model.url,
        provider=model.provider,
        difficulty_level=model.difficulty_level,
        duration_hours=model.duration_hours,
        rating=model.rating,
        is_free=model.is_free,
        skill_name=model.skill.name if model.skill else None,
        skill_category=model.skill.category if model.skill else None,
    )


def _progress_payload(model: UserLearningProgressModel) -> ResourceProgressPayload:
    return ResourceProgressPayload(
        resource_id=model.resource_id,
        status=model.status,
        progress_percentage=model.progress_percentage,
        started_at=model.started_at,
        completed_at=model.completed_at,
    )


@router.get("/resources", response_model=List[ResourcePayload])
def list_resources(
    category: Optional[str] = Query(default=ALL),
    resource_type: Optional[str] = Query(default=ALL),
    difficulty: Optional[str] = Query(default=ALL),
    session: Session = Depends(get_session_dependency),
) -> List[ResourcePayload]:
    models = learning.list_resources(
        session,
        category=category,
        resource_type=resource_type,
        difficulty=difficulty,
    )
    return [_resource_payload(model) for model in models]


@router.post("/users/{user_id}/resources/{resource_id}/start", response_model=ResourceProgressPayload)
def start_resource(
    resource_id: str,
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session_dependency),
) -> ResourceProgressPayload:
    if learning.get_resource(session, resource_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Learning resource not found")
    model = learning.start_resource(session, user_id, resource_id)
    emit_event(RESOURCE_STARTED, user_id=user_id, resource_id=resource_id)
    return _progress_payload(model)


@router.get("/users/{user_id}/resources/progress", response_model=List[ResourceProgressPayload])
def list_resource_progress(
    user_id: str = Depends(require_user_id),
    session: Session = Depends(get_session_dependency),
) -> List[ResourceProgressPayload]:
    progress = learning.progress_by_resource(session, user_id)
    return [_progress_payload(model) for model in progress.values()]


__all__ = ["router"]
