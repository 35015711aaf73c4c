from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy import Engine

from skillsense.config import get_settings
from skillsense.db import models  # noqa: F401
from skillsense.db.base import Base
from skillsense.db.session import dispose_engine, get_engine
from skillsense.telemetry import clear_listeners


@pytest.fixture
def database(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Engine]:
    monkeypatch.setenv("SKILLSENSE_DATABASE_URL", f"sqlite:///{tmp_path / 'skillsense.db'}")
    get_settings.cache_clear()
    dispose_engine()
    engine = get_engine()
    Base.metadata.create_all(engine)
    yield engine
    dispose_engine()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    yield
    clear_listeners()
