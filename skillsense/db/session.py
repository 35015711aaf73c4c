"""Process-wide engine and session helpers for the dashboard database."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import Settings, get_settings
from .monitoring import instrument_engine

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker[Session]] = None


def _engine_options(settings: Settings) -> Dict[str, Any]:
    url = make_url(settings.database_url)
    options: Dict[str, Any] = {"echo": settings.database_echo, "future": True, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options.update(pool_size=settings.database_pool_size, max_overflow=settings.database_max_overflow)
        return options

    # Progress fetches run on worker threads.
    options["connect_args"] = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def get_engine() -> Engine:
    global _engine, _session_factory
    if _engine is not None:
        return _engine

    settings = get_settings()
    if not settings.database_url:
        raise RuntimeError("SKILLSENSE_DATABASE_URL must be configured before using the database.")
    engine = create_engine(settings.database_url, **_engine_options(settings))
    instrument_engine(engine)
    logger.info("Database engine ready for %s", engine.url.render_as_string(hide_password=True))

    _engine = engine
    _session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return engine


def get_session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        get_engine()
    assert _session_factory is not None
    return _session_factory


@contextmanager
def session_scope(*, commit: bool = True) -> Generator[Session, None, None]:
    """Yield a session that commits on success when ``commit`` is set.

    Any exception rolls the session back and propagates.
    """
    session = get_session_factory()()
    try:
        yield session
        if commit:
            session.commit()
    except Exception as exc:  # noqa: BLE001
        logger.debug("Rolling back session after %s", type(exc).__name__)
        session.rollback()
        raise
    finally:
        session.close()


def get_session_dependency() -> Generator[Session, None, None]:
    with session_scope() as session:
        yield session


def dispose_engine() -> None:
    global _engine, _session_factory
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        engine.dispose()


__all__ = [
    "dispose_engine",
    "get_engine",
    "get_session_dependency",
    "get_session_factory",
    "session_scope",
]
