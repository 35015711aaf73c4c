"""Storage collaborators keyed by an explicit user id."""

from .assessments import AssessmentRepository, assessments
from .learning import LearningRepository, learning
from .skills import SkillRepository, skills

__all__ = [
    "AssessmentRepository",
    "LearningRepository",
    "SkillRepository",
    "assessments",
    "learning",
    "skills",
]
