"""Skill extraction interface and the placeholder random extractor.

No resume or profile content is inspected. :class:`RandomSkillExtractor`
assigns pseudo-random proficiencies to the first few catalog skills so the
rest of the dashboard has data to show; a real extractor only has to honour
the :class:`SkillExtractor` protocol.
"""

from __future__ import annotations

import random
from typing import List, Literal, Optional, Protocol, Sequence

from pydantic import BaseModel, Field

from .records import CandidateSkill

ExtractionSource = Literal["resume", "linkedin"]


class ExtractedSkill(BaseModel):
    user_id: str
    skill_id: str
    proficiency_level: int = Field(ge=0, le=100)
    source: ExtractionSource


class SkillExtractor(Protocol):
    def extract(
        self,
        user_id: str,
        candidates: Sequence[CandidateSkill],
        source: ExtractionSource,
    ) -> List[ExtractedSkill]:  # pragma: no cover - protocol definition
        ...


class RandomSkillExtractor:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        *,
        assign_limit: int = 6,
        floor: int = 40,
        span: int = 40,
    ) -> None:
        if floor < 0 or span < 1 or floor + span > 101:
            raise ValueError("Proficiency range must stay within 0-100.")
        self._rng = rng or random.Random()
        self.assign_limit = assign_limit
        self.floor = floor
        self.span = span

    def extract(
        self,
        user_id: str,
        candidates: Sequence[CandidateSkill],
        source: ExtractionSource,
    ) -> List[ExtractedSkill]:
        return [
            ExtractedSkill(
                user_id=user_id,
                skill_id=candidate.id,
                proficiency_level=self.floor + self._rng.randrange(self.span),
                source=source,
            )
            for candidate in list(candidates)[: self.assign_limit]
        ]


def resolve_source(resume_file_name: Optional[str]) -> ExtractionSource:
    return "resume" if resume_file_name else "linkedin"


__all__ = [
    "ExtractedSkill",
    "ExtractionSource",
    "RandomSkillExtractor",
    "SkillExtractor",
    "resolve_source",
]
