"""Progress aggregation: turns raw per-user records into dashboard statistics.

Every function here is pure and total. Inputs are snapshots that were already
fetched for a single user; nothing is cached between calls, and empty or
boundary input produces zeroed statistics instead of an error.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Sequence

from .records import (
    ACTIVITY_ASSESSMENT,
    DEFAULT_ASSESSMENT_TITLE,
    DEFAULT_RESOURCE_TITLE,
    OTHER_CATEGORY,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    ActivityItem,
    AggregateStats,
    AssessmentAttempt,
    LearningProgressEntry,
    ProgressReport,
    SkillRecord,
)

MAX_ASSESSMENT_ACTIVITY = 3
MAX_PROGRESS_ACTIVITY = 3
MAX_ACTIVITY_ITEMS = 5

PROFICIENCY_BANDS = (
    (80, "Expert"),
    (60, "Proficient"),
    (40, "Intermediate"),
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up."""
    return int(math.floor(value + 0.5))


def percentage(part: float, whole: float) -> int:
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def average_proficiency(skills: Sequence[SkillRecord]) -> int:
    if not skills:
        return 0
    total = sum(skill.proficiency_level for skill in skills)
    return round_half_up(total / len(skills))


def group_by_category(skills: Iterable[SkillRecord]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for skill in skills:
        category = (skill.category or "").strip() or OTHER_CATEGORY
        counts[category] = counts.get(category, 0) + 1
    return counts


def category_percentages(category_counts: Mapping[str, int], total_skills: int) -> Dict[str, float]:
    """Share of each category in ``total_skills``, for display only."""
    if total_skills <= 0:
        return {}
    return {category: count / total_skills * 100 for category, count in category_counts.items()}


def total_learning_hours(progress: Iterable[LearningProgressEntry]) -> float:
    # In-progress resources contribute their full duration too.
    return sum(entry.duration_hours or 0 for entry in progress)


def _sort_key(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def recent_activity(
    attempts: Sequence[AssessmentAttempt],
    progress: Sequence[LearningProgressEntry],
) -> List[ActivityItem]:
    latest_attempts = sorted(attempts, key=lambda item: _sort_key(item.completed_at), reverse=True)
    latest_progress = sorted(progress, key=lambda item: _sort_key(item.started_at), reverse=True)

    items: List[ActivityItem] = []
    for attempt in latest_attempts[:MAX_ASSESSMENT_ACTIVITY]:
        items.append(
            ActivityItem(
                kind=ACTIVITY_ASSESSMENT,
                title=attempt.assessment_title or DEFAULT_ASSESSMENT_TITLE,
                date=attempt.completed_at,
                score_percent=percentage(attempt.score, attempt.total_points),
            )
        )
    for entry in latest_progress[:MAX_PROGRESS_ACTIVITY]:
        items.append(
            ActivityItem(
                kind=entry.status,
                title=entry.resource_title or DEFAULT_RESOURCE_TITLE,
                date=entry.started_at,
            )
        )

    # sorted() is stable with reverse=True, so equal dates keep assessments first.
    items.sort(key=lambda item: _sort_key(item.date), reverse=True)
    return items[:MAX_ACTIVITY_ITEMS]


def compute_progress(
    skills: Sequence[SkillRecord],
    attempts: Sequence[AssessmentAttempt],
    progress: Sequence[LearningProgressEntry],
) -> ProgressReport:
    skills = list(skills or [])
    attempts = list(attempts or [])
    progress = list(progress or [])

    stats = AggregateStats(
        total_skills=len(skills),
        average_proficiency=average_proficiency(skills),
        completed_assessments=len(attempts),
        in_progress_resources=sum(1 for entry in progress if entry.status == STATUS_IN_PROGRESS),
        completed_resources=sum(1 for entry in progress if entry.status == STATUS_COMPLETED),
        total_learning_hours=total_learning_hours(progress),
    )
    return ProgressReport(
        stats=stats,
        category_counts=group_by_category(skills),
        activity=recent_activity(attempts, progress),
    )


def proficiency_label(level: int) -> str:
    for threshold, label in PROFICIENCY_BANDS:
        if level >= threshold:
            return label
    return "Beginner"


def activity_label(kind: str) -> str:
    if kind == ACTIVITY_ASSESSMENT:
        return "Completed assessment"
    if kind == STATUS_COMPLETED:
        return "Completed resource"
    return "Started learning"


__all__ = [
    "MAX_ACTIVITY_ITEMS",
    "activity_label",
    "average_proficiency",
    "category_percentages",
    "compute_progress",
    "group_by_category",
    "percentage",
    "proficiency_label",
    "recent_activity",
    "round_half_up",
    "total_learning_hours",
]
