"""Domain records exchanged between storage, the aggregator and the API."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


OTHER_CATEGORY = "Other"
DEFAULT_ASSESSMENT_TITLE = "Assessment"
DEFAULT_RESOURCE_TITLE = "Learning Resource"

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"
ACTIVITY_ASSESSMENT = "assessment"


class SkillRecord(BaseModel):
    """A skill held by one user, with its category already resolved.

    Read-side records carry stored values as they are; range checks happen
    when rows are written.
    """

    skill_id: str
    skill_name: Optional[str] = None
    category: Optional[str] = None
    proficiency_level: int
    source: Optional[str] = None


class AssessmentAttempt(BaseModel):
    """One persisted, already-scored run of an assessment."""

    assessment_title: Optional[str] = None
    completed_at: datetime
    score: int
    total_points: int


class LearningProgressEntry(BaseModel):
    """A user's engagement with one learning resource."""

    resource_title: Optional[str] = None
    status: str
    started_at: datetime
    duration_hours: Optional[float] = None


class AggregateStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_skills: int = 0
    average_proficiency: int = 0
    completed_assessments: int = 0
    in_progress_resources: int = 0
    completed_resources: int = 0
    total_learning_hours: float = 0


class ActivityItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    title: str
    date: datetime
    score_percent: Optional[int] = None


class ProgressReport(BaseModel):
    """Everything the progress view renders, recomputed on every request."""

    model_config = ConfigDict(frozen=True)

    stats: AggregateStats = Field(default_factory=AggregateStats)
    category_counts: Dict[str, int] = Field(default_factory=dict)
    activity: List[ActivityItem] = Field(default_factory=list)

    def as_tuple(self) -> Tuple[AggregateStats, Dict[str, int], List[ActivityItem]]:
        return self.stats, dict(self.category_counts), list(self.activity)


class Question(BaseModel):
    id: str
    question_text: str = ""
    question_type: str = "multiple_choice"
    options: List[str] = Field(default_factory=list)
    correct_answer: str
    points: int = 10
    order_number: int = 0


class CandidateSkill(BaseModel):
    """A catalog skill row offered to a skill extractor."""

    id: str
    name: str
    category: str


__all__ = [
    "ACTIVITY_ASSESSMENT",
    "ActivityItem",
    "AggregateStats",
    "AssessmentAttempt",
    "CandidateSkill",
    "DEFAULT_ASSESSMENT_TITLE",
    "DEFAULT_RESOURCE_TITLE",
    "LearningProgressEntry",
    "OTHER_CATEGORY",
    "ProgressReport",
    "Question",
    "STATUS_COMPLETED",
    "STATUS_IN_PROGRESS",
    "SkillRecord",
]
