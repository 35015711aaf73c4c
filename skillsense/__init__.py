"""SkillSense: AI and NLP skill self-assessment backend."""

__version__ = "0.1.0"
