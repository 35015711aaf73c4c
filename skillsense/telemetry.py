"""In-process telemetry for dashboard activity.

Events are plain name/payload pairs. They are logged as one JSON line on the
``skillsense.telemetry`` logger and handed to any registered listeners, which
is how the tests observe them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable, Dict, List, Mapping

from pydantic import BaseModel

logger = logging.getLogger("skillsense.telemetry")

PROGRESS_LOAD_FAILED = "progress_load_failed"
SKILLS_EXTRACTED = "skills_extracted"
ASSESSMENT_SUBMITTED = "assessment_submitted"
RESOURCE_STARTED = "resource_started"
DB_POOL_STATUS = "db_pool_status"


@dataclass(frozen=True)
class TelemetryEvent:
    name: str
    payload: Dict[str, Any]
    emitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def user_id(self) -> str | None:
        value = self.payload.get("user_id")
        return str(value) if value is not None else None


Listener = Callable[[TelemetryEvent], None]

_listeners: List[Listener] = []
_lock = RLock()


def register_listener(listener: Listener) -> None:
    with _lock:
        _listeners.append(listener)


def clear_listeners() -> None:
    with _lock:
        _listeners.clear()


def emit_event(name: str, **fields: Any) -> None:
    """Log ``name`` with ``fields`` and notify listeners.

    A listener that raises is logged and skipped; the remaining listeners
    still run and the caller never sees the error.
    """
    event = TelemetryEvent(name=name, payload=_sanitize(fields))

    with _lock:
        listeners = tuple(_listeners)

    for listener in listeners:
        try:
            listener(event)
        except Exception:  # noqa: BLE001
            logger.exception("Telemetry listener failed for %s", name)

    if logger.isEnabledFor(logging.INFO):
        logger.info("TELEMETRY %s", json.dumps({"event": name, **event.payload}, default=str))


def _sanitize(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: _plain(value) for key, value in fields.items()}


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return _plain(value.model_dump())
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_plain(item) for item in value]
    return value


__all__ = [
    "ASSESSMENT_SUBMITTED",
    "DB_POOL_STATUS",
    "PROGRESS_LOAD_FAILED",
    "RESOURCE_STARTED",
    "SKILLS_EXTRACTED",
    "TelemetryEvent",
    "clear_listeners",
    "emit_event",
    "register_listener",
]
