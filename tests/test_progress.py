from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from skillsense.progress import (
    activity_label,
    category_percentages,
    compute_progress,
    proficiency_label,
    round_half_up,
)
from skillsense.records import AssessmentAttempt, LearningProgressEntry, SkillRecord

BASE = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _skill(category: str | None, level: int, skill_id: str = "s") -> SkillRecord:
    return SkillRecord(skill_id=skill_id, category=category, proficiency_level=level)


def _attempt(title: str, days: int, score: int = 8, total: int = 10) -> AssessmentAttempt:
    return AssessmentAttempt(
        assessment_title=title,
        completed_at=BASE + timedelta(days=days),
        score=score,
        total_points=total,
    )


def _entry(title: str, days: int, status: str = "in_progress", hours: float | None = None) -> LearningProgressEntry:
    return LearningProgressEntry(
        resource_title=title,
        status=status,
        started_at=BASE + timedelta(days=days),
        duration_hours=hours,
    )


def test_empty_input_yields_zeroed_report() -> None:
    report = compute_progress([], [], [])

    assert report.stats.model_dump() == {
        "total_skills": 0,
        "average_proficiency": 0,
        "completed_assessments": 0,
        "in_progress_resources": 0,
        "completed_resources": 0,
        "total_learning_hours": 0,
    }
    assert report.category_counts == {}
    assert report.activity == []


def test_average_and_categories_for_two_skills() -> None:
    report = compute_progress([_skill("AI", 60, "a"), _skill("NLP", 80, "b")], [], [])

    assert report.stats.total_skills == 2
    assert report.stats.average_proficiency == 70
    assert report.category_counts == {"AI": 1, "NLP": 1}


@pytest.mark.parametrize(
    "levels, expected",
    [
        ([50, 51], 51),  # 50.5 rounds up
        ([0, 1, 1], 1),
        ([100, 100, 99], 100),
        ([0], 0),
        ([10, 11, 11, 11], 11),
    ],
)
def test_average_proficiency_rounds_half_up(levels: list[int], expected: int) -> None:
    skills = [_skill("AI", level, str(index)) for index, level in enumerate(levels)]
    average = compute_progress(skills, [], []).stats.average_proficiency
    assert average == expected
    assert 0 <= average <= 100


def test_missing_or_blank_category_groups_under_other() -> None:
    skills = [_skill(None, 40, "a"), _skill("  ", 50, "b"), _skill("AI", 60, "c")]
    assert compute_progress(skills, [], []).category_counts == {"Other": 2, "AI": 1}


def test_unrecognised_statuses_are_excluded_from_counts() -> None:
    progress = [
        _entry("a", 1, "in_progress"),
        _entry("b", 2, "completed"),
        _entry("c", 3, "paused"),
        _entry("d", 4, "Completed"),
    ]
    stats = compute_progress([], [], progress).stats

    assert stats.in_progress_resources == 1
    assert stats.completed_resources == 1
    assert stats.in_progress_resources + stats.completed_resources < len(progress)


def test_recognised_statuses_account_for_every_entry() -> None:
    progress = [_entry("a", 1, "in_progress"), _entry("b", 2, "completed"), _entry("c", 3, "completed")]
    stats = compute_progress([], [], progress).stats
    assert stats.in_progress_resources + stats.completed_resources == len(progress)


def test_learning_hours_count_every_status_and_treat_missing_as_zero() -> None:
    progress = [
        _entry("a", 1, "in_progress", 4.5),
        _entry("b", 2, "completed", 10),
        _entry("c", 3, "paused", None),
    ]
    assert compute_progress([], [], progress).stats.total_learning_hours == pytest.approx(14.5)


def test_completed_assessments_counts_all_attempts() -> None:
    attempts = [_attempt(f"quiz-{day}", day) for day in range(7)]
    assert compute_progress([], attempts, []).stats.completed_assessments == 7


def test_activity_feed_merges_latest_three_of_each_and_caps_at_five() -> None:
    attempts = [_attempt(f"quiz-{day}", day) for day in (1, 3, 5, 7)]
    progress = [_entry(f"course-{day}", day) for day in (2, 4, 6, 8)]

    activity = compute_progress([], attempts, progress).activity

    assert len(activity) == 5
    assert [item.title for item in activity] == ["course-8", "quiz-7", "course-6", "quiz-5", "course-4"]
    dates = [item.date for item in activity]
    assert dates == sorted(dates, reverse=True)
    assert len(set(dates)) == len(dates)


def test_activity_feed_ignores_input_order_when_selecting_most_recent() -> None:
    attempts = [_attempt("old", 1), _attempt("newest", 9), _attempt("mid", 5), _attempt("older", 2)]
    titles = [item.title for item in compute_progress([], attempts, []).activity]
    assert titles == ["newest", "mid", "older"]


def test_activity_ties_place_assessments_before_progress() -> None:
    attempts = [_attempt("quiz", 3)]
    progress = [_entry("course", 3)]

    activity = compute_progress([], attempts, progress).activity

    assert [item.kind for item in activity] == ["assessment", "in_progress"]


def test_activity_items_carry_score_only_for_assessments() -> None:
    attempts = [_attempt("quiz", 2, score=2, total=3)]
    progress = [_entry("course", 1, "completed")]

    quiz, course = compute_progress([], attempts, progress).activity

    assert quiz.kind == "assessment"
    assert quiz.score_percent == 67
    assert course.kind == "completed"
    assert course.score_percent is None


def test_activity_uses_fallback_titles() -> None:
    attempt = AssessmentAttempt(completed_at=BASE, score=5, total_points=10)
    entry = LearningProgressEntry(status="in_progress", started_at=BASE - timedelta(days=1))

    activity = compute_progress([], [attempt], [entry]).activity

    assert [item.title for item in activity] == ["Assessment", "Learning Resource"]
    assert activity[0].score_percent == 50


def test_activity_compares_naive_timestamps_as_utc() -> None:
    naive = datetime(2024, 5, 3, 12, 0)
    attempts = [AssessmentAttempt(assessment_title="naive", completed_at=naive, score=1, total_points=1)]
    progress = [_entry("aware", 1)]

    titles = [item.title for item in compute_progress([], attempts, progress).activity]
    assert titles == ["naive", "aware"]


def test_zero_total_points_does_not_divide_by_zero() -> None:
    attempt = AssessmentAttempt(assessment_title="empty", completed_at=BASE, score=0, total_points=0)
    assert compute_progress([], [attempt], []).activity[0].score_percent == 0


def test_category_percentages() -> None:
    assert category_percentages({"AI": 1, "NLP": 3}, 4) == {"AI": 25.0, "NLP": 75.0}
    assert category_percentages({}, 0) == {}


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


@pytest.mark.parametrize(
    "level, label",
    [(95, "Expert"), (80, "Expert"), (79, "Proficient"), (60, "Proficient"), (40, "Intermediate"), (39, "Beginner")],
)
def test_proficiency_label(level: int, label: str) -> None:
    assert proficiency_label(level) == label


def test_activity_label() -> None:
    assert activity_label("assessment") == "Completed assessment"
    assert activity_label("completed") == "Completed resource"
    assert activity_label("in_progress") == "Started learning"


def test_report_unpacks_as_triple() -> None:
    stats, categories, activity = compute_progress([_skill("AI", 50)], [], []).as_tuple()
    assert stats.total_skills == 1
    assert categories == {"AI": 1}
    assert activity == []
