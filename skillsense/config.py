import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: Optional[str] = Field(None, alias="SKILLSENSE_DATABASE_URL")
    database_pool_size: int = Field(10, alias="SKILLSENSE_DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(10, alias="SKILLSENSE_DATABASE_MAX_OVERFLOW")
    database_echo: bool = Field(False, alias="SKILLSENSE_DATABASE_ECHO")
    extraction_candidate_limit: int = Field(10, ge=1, alias="SKILLSENSE_EXTRACTION_CANDIDATE_LIMIT")
    extraction_assign_limit: int = Field(6, ge=1, alias="SKILLSENSE_EXTRACTION_ASSIGN_LIMIT")
    progress_fetch_workers: int = Field(3, ge=1, alias="SKILLSENSE_PROGRESS_FETCH_WORKERS")

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[arg-type]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid backend configuration: {exc}") from exc
