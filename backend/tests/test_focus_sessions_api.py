from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clarityhq.db.deps import get_db
from clarityhq.db.models.focus_session import FocusSession
from clarityhq.db.models.user import User
from clarityhq.main import app
from clarityhq.services.focus_sessions import summarize_sessions
from clarityhq.services.reflection_coach import (
    DEFAULT_REFLECTION_RESPONSE,
    EMPTY_REFLECTION_RESPONSE,
    HIGH_COMPLETION_PROMPTS,
)


@pytest.fixture()
def client():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):  # pragma: no cover - sqlite setup
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    User.__table__.create(bind=engine)
    FocusSession.__table__.create(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client, TestingSessionLocal
    app.dependency_overrides.clear()


def _record_session(client: TestClient, user_id: UUID, energy_level: str = "balanced", duration: int = 30) -> dict:
    response = client.post(
        "/focus/sessions",
        json={"user_id": str(user_id), "energy_level": energy_level, "duration": duration},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _reflect(client: TestClient, session_id: str, user_id: UUID, **fields):
    return client.patch(
        f"/focus/sessions/{session_id}/reflection",
        json={"user_id": str(user_id), **fields},
    )


def test_record_session_stores_metadata_only(client):
    test_client, SessionLocal = client
    user_id = uuid4()

    body = _record_session(test_client, user_id, "wired", 45)

    assert body["energy_level"] == "wired"
    assert body["duration"] == 45
    assert body["tasks_completed"] == 0
    assert body["reflection"] is None
    assert body["barriers"] is None
    with SessionLocal() as db:
        assert db.get(User, user_id) is not None


def test_record_session_rejects_unknown_energy(client):
    test_client, _ = client
    response = test_client.post(
        "/focus/sessions",
        json={"user_id": str(uuid4()), "energy_level": "sleepy", "duration": 30},
    )
    assert response.status_code == 422


def test_save_reflection_and_coach_response(client):
    test_client, _ = client
    user_id = uuid4()
    session = _record_session(test_client, user_id)

    response = _reflect(
        test_client,
        session["id"],
        user_id,
        tasks_completed=2,
        reflection="  Got distracted by notifications  ",
        satisfaction_rating=4,
        barriers=["notifications", "noise"],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["session"]["reflection"] == "Got distracted by notifications"
    assert body["session"]["tasks_completed"] == 2
    assert body["session"]["satisfaction_rating"] == 4
    assert body["session"]["barriers"] == ["notifications", "noise"]
    assert body["coach_response"].startswith("Noticing distractions")


def test_blank_reflection_is_stored_as_null(client):
    test_client, _ = client
    user_id = uuid4()
    session = _record_session(test_client, user_id)

    response = _reflect(test_client, session["id"], user_id, reflection="   ")

    assert response.status_code == 200
    body = response.json()
    assert body["session"]["reflection"] is None
    assert body["session"]["tasks_completed"] == 0
    assert body["coach_response"] == EMPTY_REFLECTION_RESPONSE


@pytest.mark.parametrize("rating", [0, 6])
def test_reflection_rejects_out_of_range_rating(client, rating):
    test_client, _ = client
    user_id = uuid4()
    session = _record_session(test_client, user_id)

    response = _reflect(test_client, session["id"], user_id, satisfaction_rating=rating)

    assert response.status_code == 422


def test_reflection_ownership_and_missing_session(client):
    test_client, _ = client
    owner = uuid4()
    session = _record_session(test_client, owner)

    assert _reflect(test_client, session["id"], uuid4(), reflection="mine?").status_code == 403
    assert _reflect(test_client, str(uuid4()), owner, reflection="where?").status_code == 404

    lookup = test_client.get(f"/focus/sessions/{session['id']}", params={"user_id": str(owner)})
    assert lookup.status_code == 200
    assert lookup.json()["id"] == session["id"]
    forbidden = test_client.get(f"/focus/sessions/{session['id']}", params={"user_id": str(uuid4())})
    assert forbidden.status_code == 403


def test_list_sessions_is_scoped_to_user(client):
    test_client, _ = client
    user_id = uuid4()
    first = _record_session(test_client, user_id)
    second = _record_session(test_client, user_id, "anxious", 15)
    _record_session(test_client, uuid4())

    response = test_client.get("/focus/sessions", params={"user_id": str(user_id)})

    assert response.status_code == 200
    assert {item["id"] for item in response.json()} == {first["id"], second["id"]}


def test_stats_for_new_user_are_empty(client):
    test_client, _ = client
    user_id = uuid4()

    response = test_client.get("/focus/sessions/stats", params={"user_id": str(user_id)})

    assert response.status_code == 200
    body = response.json()
    assert body["total_sessions"] == 0
    assert body["total_time"] == 0
    assert body["avg_satisfaction"] is None
    assert body["common_barriers"] is None


def test_stats_aggregate_duration_rating_and_barriers(client):
    test_client, _ = client
    user_id = uuid4()
    first = _record_session(test_client, user_id, duration=30)
    second = _record_session(test_client, user_id, duration=45)
    _record_session(test_client, user_id, duration=15)
    _reflect(test_client, first["id"], user_id, satisfaction_rating=5, barriers=["phone", "noise"])
    _reflect(test_client, second["id"], user_id, satisfaction_rating=2, barriers=["phone"])

    body = test_client.get("/focus/sessions/stats", params={"user_id": str(user_id)}).json()

    assert body["total_sessions"] == 3
    assert body["total_time"] == 90
    assert body["avg_satisfaction"] == pytest.approx(3.5)
    assert body["common_barriers"] == ["phone", "noise"]


def test_summarize_sessions_keeps_top_three_barriers() -> None:
    rows = [
        (30, 4, ["phone", "noise", "hunger"]),
        (15, None, ["phone", "noise", "email"]),
        (45, 3, ["phone", None, 7]),
        (None, "x", "not-a-list"),
    ]

    stats = summarize_sessions(rows)

    assert stats.total_sessions == 4
    assert stats.total_time == 90
    assert stats.avg_satisfaction == pytest.approx(3.5)
    assert stats.common_barriers[:2] == ["phone", "noise"]
    assert len(stats.common_barriers) == 3


def test_reflection_prompt_endpoint(client):
    test_client, _ = client

    response = test_client.get(
        "/focus/reflection/prompt",
        params={"completed_tasks": 3, "total_tasks": 3, "focus_time": 25, "seed": 1},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["progress_percent"] == 100.0
    assert body["prompt"] in HIGH_COMPLETION_PROMPTS
    assert body["celebration"] == "You completed everything you set out to do. Amazing focus!"


def test_plain_reflection_gets_default_response(client):
    test_client, _ = client
    user_id = uuid4()
    session = _record_session(test_client, user_id)

    body = _reflect(test_client, session["id"], user_id, reflection="Quiet morning").json()

    assert body["coach_response"] == DEFAULT_REFLECTION_RESPONSE
