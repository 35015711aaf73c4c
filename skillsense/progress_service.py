"""Loads a user's three record sets and hands them to the aggregator."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Protocol, TypeVar

from .config import get_settings
from .db.session import session_scope
from .progress import compute_progress
from .records import AssessmentAttempt, LearningProgressEntry, ProgressReport, SkillRecord
from .repositories import assessments, learning, skills
from .repositories._common import normalize_user_id
from .telemetry import PROGRESS_LOAD_FAILED, emit_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressLoadError(RuntimeError):
    """Raised when any of the record fetches fails; no partial report is built."""

    def __init__(self, user_id: str, source: str, cause: BaseException) -> None:
        super().__init__(f"Unable to load {source} for user {user_id}: {cause}")
        self.user_id = user_id
        self.source = source


class ProgressFetcher(Protocol):
    def fetch_user_skills(self, user_id: str) -> List[SkillRecord]:  # pragma: no cover - protocol definition
        ...

    def fetch_user_assessment_attempts(self, user_id: str) -> List[AssessmentAttempt]:  # pragma: no cover
        ...

    def fetch_user_learning_progress(self, user_id: str) -> List[LearningProgressEntry]:  # pragma: no cover
        ...


class DatabaseProgressFetcher:
    """Fetcher that opens one read-only session per record set."""

    def fetch_user_skills(self, user_id: str) -> List[SkillRecord]:
        with session_scope(commit=False) as session:
            return skills.fetch_user_skills(session, user_id)

    def fetch_user_assessment_attempts(self, user_id: str) -> List[AssessmentAttempt]:
        with session_scope(commit=False) as session:
            return assessments.fetch_user_assessment_attempts(session, user_id)

    def fetch_user_learning_progress(self, user_id: str) -> List[LearningProgressEntry]:
        with session_scope(commit=False) as session:
            return learning.fetch_user_learning_progress(session, user_id)


def _result(user_id: str, source: str, future_result: Callable[[], T]) -> T:
    try:
        return future_result()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Progress fetch failed for user_id=%s source=%s: %s", user_id, source, exc)
        emit_event(PROGRESS_LOAD_FAILED, user_id=user_id, source=source, error=str(exc))
        raise ProgressLoadError(user_id, source, exc) from exc


def load_progress(user_id: str, fetcher: Optional[ProgressFetcher] = None) -> ProgressReport:
    """Fetch skills, attempts and learning progress concurrently, then aggregate.

    All three fetches must succeed. The first failure (in skills, attempts,
    progress order) is raised as :class:`ProgressLoadError` after every fetch
    has settled. A blank ``user_id`` raises :class:`ValueError` before any
    fetch starts.
    """
    user_id = normalize_user_id(user_id)
    fetcher = fetcher or DatabaseProgressFetcher()
    workers = min(get_settings().progress_fetch_workers, 3)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="progress-fetch") as pool:
        skills_future = pool.submit(fetcher.fetch_user_skills, user_id)
        attempts_future = pool.submit(fetcher.fetch_user_assessment_attempts, user_id)
        progress_future = pool.submit(fetcher.fetch_user_learning_progress, user_id)

    # Leaving the executor block waits for all three fetches.
    user_skills = _result(user_id, "skills", skills_future.result)
    attempts = _result(user_id, "assessment attempts", attempts_future.result)
    progress = _result(user_id, "learning progress", progress_future.result)

    report = compute_progress(user_skills, attempts, progress)
    logger.debug(
        "Computed progress for user_id=%s skills=%s attempts=%s resources=%s",
        user_id,
        report.stats.total_skills,
        report.stats.completed_assessments,
        len(progress),
    )
    return report


__all__ = [
    "DatabaseProgressFetcher",
    "ProgressFetcher",
    "ProgressLoadError",
    "load_progress",
]
