"""Pydantic payloads returned by the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StatsPayload(BaseModel):
    total_skills: int
    average_proficiency: int
    completed_assessments: int
    in_progress_resources: int
    completed_resources: int
    total_learning_hours: float


class CategoryBreakdownPayload(BaseModel):
    category: str
    count: int
    percentage: float


class ActivityPayload(BaseModel):
    kind: str
    label: str
    title: str
    date: datetime
    score_percent: Optional[int] = None


class ProgressPayload(BaseModel):
    user_id: str
    stats: StatsPayload
    category_counts: Dict[str, int] = Field(default_factory=dict)
    categories: List[CategoryBreakdownPayload] = Field(default_factory=list)
    activity: List[ActivityPayload] = Field(default_factory=list)


class UserSkillPayload(BaseModel):
    skill_id: str
    name: Optional[str] = None
    category: str
    proficiency_level: int
    proficiency_label: str
    source: Optional[str] = None


class AnalyzeRequest(BaseModel):
    resume_file_name: Optional[str] = Field(default=None, max_length=255)
    linkedin_url: Optional[str] = Field(default=None, max_length=2048)


class AnalyzeResponse(BaseModel):
    message: str
    source: str
    extracted_count: int
    skills: List[UserSkillPayload] = Field(default_factory=list)


class AssessmentPayload(BaseModel):
    id: str
    title: str
    description: str
    category: str
    difficulty_level: str
    duration_minutes: int


class QuestionPayload(BaseModel):
    id: str
    question_text: str
    question_type: str
    options: List[str] = Field(default_factory=list)
    points: int
    order_number: int


class SubmitAssessmentRequest(BaseModel):
    answers: Dict[str, str] = Field(default_factory=dict)


class QuestionResultPayload(BaseModel):
    question_id: str
    selected: Optional[str] = None
    correct_answer: str
    is_correct: bool


class SubmitAssessmentResponse(BaseModel):
    attempt_id: str
    score: int
    total_points: int
    percent: int
    passed: bool
    results: List[QuestionResultPayload] = Field(default_factory=list)


class CompletedAssessmentPayload(BaseModel):
    attempt_id: str
    assessment_id: Optional[str] = None
    title: str
    score: int
    total_points: int
    percent: int
    passed: bool
    completed_at: datetime


class ResourcePayload(BaseModel):
    id: str
    title: str
    description: str
    resource_type: str
    url: str
    provider: str
    difficulty_level: str
    duration_hours: Optional[float] = None
    rating: Optional[float] = None
    is_free: bool
    skill_name: Optional[str] = None
    skill_category: Optional[str] = None


class ResourceProgressPayload(BaseModel):
    resource_id: str
    status: str
    progress_percentage: int
    started_at: datetime
    completed_at: Optional[datetime] = None


__all__ = [
    "ActivityPayload",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "AssessmentPayload",
    "CategoryBreakdownPayload",
    "CompletedAssessmentPayload",
    "ProgressPayload",
    "QuestionPayload",
    "QuestionResultPayload",
    "ResourcePayload",
    "ResourceProgressPayload",
    "StatsPayload",
    "SubmitAssessmentRequest",
    "SubmitAssessmentResponse",
    "UserSkillPayload",
]
