"""End-to-end tests for the dashboard HTTP API."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from skillsense import progress_routes
from skillsense.assessment_catalog import default_questions
from skillsense.catalog_seed import seed_catalog
from skillsense.db.models import (
    AssessmentModel,
    AssessmentQuestionModel,
    ResumeUploadModel,
    SkillModel,
    UserAssessmentModel,
    UserSkillModel,
)
from skillsense.db.session import session_scope
from skillsense.main import app
from skillsense.progress_service import ProgressLoadError
from skillsense.telemetry import PROGRESS_LOAD_FAILED, TelemetryEvent, register_listener


@pytest.fixture
def client(database) -> Iterator[TestClient]:
    with session_scope() as session:
        seed_catalog(session)
    yield TestClient(app)


def _assessment_id(title: str = "AI Fundamentals") -> str:
    with session_scope(commit=False) as session:
        return session.execute(select(AssessmentModel.id).where(AssessmentModel.title == title)).scalar_one()


def test_healthz(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}
    payload = client.get("/healthz/database").json()
    assert payload["status"] == "ok"
    assert "in_use" in payload["pool"]


def test_progress_for_new_user_is_empty(client: TestClient) -> None:
    response = client.get("/api/users/new-user/progress")

    assert response.status_code == 200
    payload = response.json()
    assert payload["stats"]["total_skills"] == 0
    assert payload["stats"]["average_proficiency"] == 0
    assert payload["categories"] == []
    assert payload["activity"] == []


def test_progress_fetch_failure_returns_503(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(user_id: str):
        raise ProgressLoadError(user_id, "skills", ConnectionError("down"))

    monkeypatch.setattr(progress_routes, "load_progress", fail)

    response = client.get("/api/users/user-1/progress")

    assert response.status_code == 503
    assert response.json()["detail"] == "Unable to load progress"


def test_analyze_requires_resume_or_linkedin(client: TestClient) -> None:
    response = client.post("/api/users/user-1/skills/analyze", json={"linkedin_url": "  "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please upload a resume or enter a LinkedIn URL"


def test_analyze_from_linkedin_assigns_six_skills(client: TestClient) -> None:
    response = client.post(
        "/api/users/user-1/skills/analyze",
        json={"linkedin_url": "https://www.linkedin.com/in/example"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "linkedin"
    assert payload["extracted_count"] == 6
    assert len(payload["skills"]) == 6
    assert all(40 <= skill["proficiency_level"] <= 79 for skill in payload["skills"])
    assert all(skill["proficiency_label"] in {"Intermediate", "Proficient"} for skill in payload["skills"])
    levels = [skill["proficiency_level"] for skill in payload["skills"]]
    assert levels == sorted(levels, reverse=True)

    with session_scope(commit=False) as session:
        uploads = session.execute(select(func.count()).select_from(ResumeUploadModel)).scalar_one()
    assert uploads == 0


def test_repeat_resume_analysis_upserts_skills(client: TestClient) -> None:
    for _ in range(2):
        response = client.post("/api/users/user-1/skills/analyze", json={"resume_file_name": "cv.pdf"})
        assert response.status_code == 200
        assert response.json()["source"] == "resume"

    with session_scope(commit=False) as session:
        skill_rows = session.execute(
            select(func.count()).select_from(UserSkillModel).where(UserSkillModel.user_id == "user-1")
        ).scalar_one()
        uploads = session.execute(select(ResumeUploadModel)).scalars().all()

    assert skill_rows == 6
    assert len(uploads) == 2
    assert uploads[0].parsed_data == {"extracted_skills": 6}

    skills = client.get("/api/users/user-1/skills").json()
    assert len(skills) == 6


def test_questions_fall_back_to_builtin_bank_without_answer_keys(client: TestClient) -> None:
    response = client.get(f"/api/assessments/{_assessment_id()}/questions")

    assert response.status_code == 200
    questions = response.json()
    assert [question["id"] for question in questions] == ["1", "2", "3", "4", "5"]
    assert all("correct_answer" not in question for question in questions)


def test_unknown_assessment_is_404(client: TestClient) -> None:
    assert client.get("/api/assessments/missing/questions").status_code == 404
    response = client.post("/api/users/user-1/assessments/missing/submit", json={"answers": {}})
    assert response.status_code == 404


def test_submit_assessment_scores_and_feeds_progress(client: TestClient) -> None:
    assessment_id = _assessment_id()
    bank = default_questions()
    answers = {question.id: question.correct_answer for question in bank[:3]}
    answers[bank[3].id] = "To reduce model size"

    response = client.post(
        f"/api/users/user-1/assessments/{assessment_id}/submit",
        json={"answers": answers},
    )

    assert response.status_code == 200
    result = response.json()
    assert (result["score"], result["total_points"], result["percent"]) == (30, 50, 60)
    assert result["passed"] is False
    assert [item["is_correct"] for item in result["results"]] == [True, True, True, False, False]

    completed = client.get("/api/users/user-1/assessments/completed").json()
    assert len(completed) == 1
    assert completed[0]["title"] == "AI Fundamentals"
    assert completed[0]["percent"] == 60

    progress = client.get("/api/users/user-1/progress").json()
    assert progress["stats"]["completed_assessments"] == 1
    assert progress["activity"][0]["kind"] == "assessment"
    assert progress["activity"][0]["label"] == "Completed assessment"
    assert progress["activity"][0]["score_percent"] == 60


def test_submit_uses_stored_questions_when_present(client: TestClient) -> None:
    assessment_id = _assessment_id("NLP Essentials")
    with session_scope() as session:
        session.add(
            AssessmentQuestionModel(
                id="stored-1",
                assessment_id=assessment_id,
                question_text="Which model family uses self-attention?",
                options=["RNN", "Transformer"],
                correct_answer="Transformer",
                points=4,
                order_number=1,
            )
        )

    response = client.post(
        f"/api/users/user-2/assessments/{assessment_id}/submit",
        json={"answers": {"stored-1": "Transformer"}},
    )

    result = response.json()
    assert (result["score"], result["total_points"], result["passed"]) == (4, 4, True)


def test_resources_filter_and_start(client: TestClient) -> None:
    all_resources = client.get("/api/resources").json()
    assert len(all_resources) == 5

    nlp = client.get("/api/resources", params={"category": "NLP", "resource_type": "tutorial"}).json()
    assert [resource["title"] for resource in nlp] == ["Hugging Face NLP Course"]
    assert nlp[0]["skill_category"] == "NLP"

    resource_id = nlp[0]["id"]
    started = client.post(f"/api/users/user-1/resources/{resource_id}/start")
    assert started.status_code == 200
    assert started.json()["status"] == "in_progress"
    assert started.json()["progress_percentage"] == 0

    progress_rows = client.get("/api/users/user-1/resources/progress").json()
    assert [row["resource_id"] for row in progress_rows] == [resource_id]

    progress = client.get("/api/users/user-1/progress").json()
    assert progress["stats"]["in_progress_resources"] == 1
    assert progress["stats"]["total_learning_hours"] == 20.0
    assert progress["activity"][0]["label"] == "Started learning"


def test_start_unknown_resource_is_404(client: TestClient) -> None:
    assert client.post("/api/users/user-1/resources/missing/start").status_code == 404


def test_progress_category_breakdown(client: TestClient) -> None:
    client.post("/api/users/user-1/skills/analyze", json={"linkedin_url": "https://linkedin.com/in/x"})

    payload = client.get("/api/users/user-1/progress").json()

    counts = payload["category_counts"]
    assert sum(counts.values()) == payload["stats"]["total_skills"] == 6
    shares = {entry["category"]: entry["percentage"] for entry in payload["categories"]}
    assert sum(shares.values()) == pytest.approx(100.0)


def test_out_of_range_stored_rows_do_not_break_the_dashboard(client: TestClient) -> None:
    assessment_id = _assessment_id()
    with session_scope() as session:
        skill_id = session.execute(select(SkillModel.id).where(SkillModel.name == "Deep Learning")).scalar_one()
        session.add(UserSkillModel(user_id="user-1", skill_id=skill_id, proficiency_level=120, source="import"))
        session.add(UserAssessmentModel(user_id="user-1", assessment_id=assessment_id, score=-1, total_points=10))

    progress = client.get("/api/users/user-1/progress")
    assert progress.status_code == 200
    payload = progress.json()
    assert payload["stats"]["total_skills"] == 1
    assert payload["stats"]["average_proficiency"] == 120
    assert payload["stats"]["completed_assessments"] == 1
    assert payload["activity"][0]["score_percent"] == -10

    skills_response = client.get("/api/users/user-1/skills")
    assert skills_response.status_code == 200
    assert skills_response.json()[0]["proficiency_label"] == "Expert"


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/users/%20/progress"),
        ("get", "/api/users/%20/skills"),
        ("get", "/api/users/%20/resources/progress"),
        ("get", "/api/users/%20/assessments/completed"),
    ],
)
def test_blank_user_id_is_rejected(client: TestClient, method: str, path: str) -> None:
    events: list[TelemetryEvent] = []
    register_listener(events.append)

    response = client.request(method, path)

    assert response.status_code == 400
    assert response.json()["detail"] == "User id cannot be empty."
    assert PROGRESS_LOAD_FAILED not in {event.name for event in events}


def test_blank_user_id_is_rejected_on_writes(client: TestClient) -> None:
    assessment_id = _assessment_id()
    resource_id = client.get("/api/resources").json()[0]["id"]

    submit = client.post(f"/api/users/%20/assessments/{assessment_id}/submit", json={"answers": {}})
    start = client.post(f"/api/users/%20/resources/{resource_id}/start")
    analyze = client.post("/api/users/%20/skills/analyze", json={"linkedin_url": "https://linkedin.com/in/x"})

    assert [submit.status_code, start.status_code, analyze.status_code] == [400, 400, 400]
    with session_scope(commit=False) as session:
        assert session.execute(select(func.count()).select_from(UserAssessmentModel)).scalar_one() == 0
