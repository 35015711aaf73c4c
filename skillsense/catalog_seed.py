"""Starter catalog of skills, assessments and learning resources."""

from __future__ import annotations

import logging
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .db.models import AssessmentModel, LearningResourceModel, SkillModel

logger = logging.getLogger(__name__)

SKILLS = (
    ("Machine Learning Fundamentals", "AI", "beginner"),
    ("Deep Learning", "AI", "intermediate"),
    ("Neural Network Architectures", "AI", "advanced"),
    ("Reinforcement Learning", "AI", "advanced"),
    ("Computer Vision", "AI", "intermediate"),
    ("Text Preprocessing", "NLP", "beginner"),
    ("Word Embeddings", "NLP", "intermediate"),
    ("Transformers", "NLP", "advanced"),
    ("Named Entity Recognition", "NLP", "intermediate"),
    ("Sentiment Analysis", "NLP", "beginner"),
)

ASSESSMENTS = (
    ("AI Fundamentals", "Core machine learning concepts and terminology.", "AI", "beginner", 15),
    ("NLP Essentials", "Preprocessing, embeddings and transformer basics.", "NLP", "intermediate", 20),
)

RESOURCES = (
    ("Machine Learning Crash Course", "course", "https://developers.google.com/machine-learning/crash-course",
     "Google", "Machine Learning Fundamentals", "beginner", 15.0, 4.7, True),
    ("Deep Learning Specialization", "certification", "https://www.coursera.org/specializations/deep-learning",
     "Coursera", "Deep Learning", "intermediate", 80.0, 4.9, False),
    ("The Illustrated Transformer", "article", "https://jalammar.github.io/illustrated-transformer/",
     "Jay Alammar", "Transformers", "intermediate", 1.0, 4.8, True),
    ("Hugging Face NLP Course", "tutorial", "https://huggingface.co/learn/nlp-course",
     "Hugging Face", "Transformers", "intermediate", 20.0, 4.8, True),
    ("Speech and Language Processing", "book", "https://web.stanford.edu/~jurafsky/slp3/",
     "Stanford", "Text Preprocessing", "advanced", None, 4.6, True),
)


def seed_catalog(session: Session) -> Dict[str, int]:
    """Insert the starter catalog into empty tables; populated tables are left alone."""
    created = {"skills": 0, "assessments": 0, "resources": 0}

    if session.execute(select(func.count()).select_from(SkillModel)).scalar_one() == 0:
        for name, category, difficulty in SKILLS:
            session.add(SkillModel(name=name, category=category, difficulty_level=difficulty))
            created["skills"] += 1
        session.flush()

    if session.execute(select(func.count()).select_from(AssessmentModel)).scalar_one() == 0:
        for title, description, category, difficulty, minutes in ASSESSMENTS:
            session.add(
                AssessmentModel(
                    title=title,
                    description=description,
                    category=category,
                    difficulty_level=difficulty,
                    duration_minutes=minutes,
                )
            )
            created["assessments"] += 1

    if session.execute(select(func.count()).select_from(LearningResourceModel)).scalar_one() == 0:
        skill_ids = {model.name: model.id for model in session.execute(select(SkillModel)).scalars()}
        for title, kind, url, provider, skill_name, difficulty, hours, rating, is_free in RESOURCES:
            session.add(
                LearningResourceModel(
                    title=title,
                    resource_type=kind,
                    url=url,
                    provider=provider,
                    skill_id=skill_ids.get(skill_name),
                    difficulty_level=difficulty,
                    duration_hours=hours,
                    rating=rating,
                    is_free=is_free,
                )
            )
            created["resources"] += 1

    session.flush()
    logger.info("Seeded catalog: %s", created)
    return created


__all__ = ["ASSESSMENTS", "RESOURCES", "SKILLS", "seed_catalog"]
