from __future__ import annotations

from datetime import datetime, timezone

from skillsense.telemetry import TelemetryEvent, emit_event, register_listener


def test_emit_event_serialises_datetimes_and_fans_out() -> None:
    received: list[TelemetryEvent] = []
    register_listener(received.append)

    emit_event("skills_extracted", user_id="u1", at=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert received[0].name == "skills_extracted"
    assert received[0].payload["at"] == "2024-01-01T00:00:00+00:00"


def test_failing_listener_does_not_block_others() -> None:
    received: list[str] = []

    def broken(event: TelemetryEvent) -> None:
        raise RuntimeError("listener bug")

    register_listener(broken)
    register_listener(lambda event: received.append(event.name))

    emit_event("resource_started", user_id="u1")

    assert received == ["resource_started"]


def test_payload_models_and_collections_are_flattened() -> None:
    from skillsense.records import AggregateStats

    received: list[TelemetryEvent] = []
    register_listener(received.append)

    emit_event("progress_snapshot", user_id=42, stats=AggregateStats(total_skills=2), sources=("skills", "attempts"))

    event = received[0]
    assert event.user_id == "42"
    assert event.payload["stats"]["total_skills"] == 2
    assert event.payload["sources"] == ["skills", "attempts"]
