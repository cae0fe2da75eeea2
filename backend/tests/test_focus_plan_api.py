from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clarityhq.db.deps import get_db
from clarityhq.db.models.task import Task
from clarityhq.db.models.user import User
from clarityhq.main import app
from clarityhq.services import focus_copy


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
    Task.__table__.create(bind=engine)

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


def _create_task(client: TestClient, user_id: UUID, title: str, priority: str, **fields) -> str:
    response = client.post(
        "/tasks",
        json={"user_id": str(user_id), "title": title, "priority": priority, **fields},
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


def test_plan_without_user_uses_placeholders(client):
    test_client, _ = client

    response = test_client.post("/focus/plan", json={"energy_level": "sluggish", "time_available": 15})

    assert response.status_code == 200
    body = response.json()
    plan = body["plan"]
    assert plan["placeholder"] is True
    assert (plan["focus_time"], plan["break_time"], plan["total_time"]) == (10, 5, 15)
    assert sum(task["duration_minutes"] for task in plan["tasks"]) == 10
    assert all(task["source_task_id"] is None for task in plan["tasks"])
    assert plan["break_suggestion"] in focus_copy.BREAK_SUGGESTIONS["sluggish"]
    assert body["rendered"].startswith("# Your Personalized Focus Session\n")
    assert body["request_id"] == response.headers["X-Request-Id"]


def test_plan_uses_open_tasks_for_user(client):
    test_client, _ = client
    user_id = uuid4()
    high_ids = [
        _create_task(test_client, user_id, f"High {index}", "high", due_date=f"2026-02-0{index}T09:00:00Z")
        for index in range(1, 4)
    ]
    _create_task(test_client, user_id, "Finished", "high", status="completed")

    response = test_client.post(
        "/focus/plan",
        json={"user_id": str(user_id), "energy_level": "energized", "time_available": 45, "focus_area": "any"},
    )

    assert response.status_code == 200
    plan = response.json()["plan"]
    assert plan["placeholder"] is False
    assert (plan["focus_time"], plan["break_time"]) == (38, 7)
    assert [task["source_task_id"] for task in plan["tasks"]] == high_ids
    assert [task["duration_minutes"] for task in plan["tasks"]] == [12, 12, 14]


def test_plan_honours_selected_tasks(client):
    test_client, _ = client
    user_id = uuid4()
    low_id = _create_task(test_client, user_id, "Low", "low", due_date="2026-02-01T09:00:00Z")
    _create_task(test_client, user_id, "High", "high", due_date="2026-02-02T09:00:00Z")

    response = test_client.post(
        "/focus/plan",
        json={
            "user_id": str(user_id),
            "energy_level": "energized",
            "time_available": 30,
            "selected_task_ids": [low_id],
        },
    )

    assert response.status_code == 200
    tasks = response.json()["plan"]["tasks"]
    assert [task["source_task_id"] for task in tasks] == [low_id]
    assert tasks[0]["duration_minutes"] == 25


def test_plan_rejects_selected_tasks_without_user(client):
    test_client, _ = client

    response = test_client.post(
        "/focus/plan",
        json={"energy_level": "balanced", "time_available": 30, "selected_task_ids": [str(uuid4())]},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "selected_task_ids requires user_id"


def test_plan_is_reproducible_with_seed(client):
    test_client, _ = client
    payload = {"energy_level": "balanced", "time_available": 60, "focus_area": "creative", "seed": 7}

    first = test_client.post("/focus/plan", json=payload).json()
    second = test_client.post("/focus/plan", json=payload).json()

    assert first["plan"] == second["plan"]
    assert first["rendered"] == second["rendered"]


@pytest.mark.parametrize(
    "payload",
    [
        {"energy_level": "sleepy", "time_available": 30},
        {"energy_level": "balanced", "time_available": 25},
        {"energy_level": "balanced", "time_available": 30, "focus_area": "music"},
        {"energy_level": "balanced", "time_available": 30, "selected_task_ids": [str(uuid4()) for _ in range(4)]},
    ],
)
def test_plan_rejects_invalid_inputs(client, payload):
    test_client, _ = client
    assert test_client.post("/focus/plan", json=payload).status_code == 422


def test_plan_from_text_query(client):
    test_client, _ = client
    user_id = uuid4()
    task_id = _create_task(test_client, user_id, "Reply to landlord", "medium")

    response = test_client.post(
        "/focus/plan/query",
        json={"text": "I feel restless, got 30 minutes for email", "user_id": str(user_id), "seed": 3},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["parsed"] == {"energy_level": "wired", "time_available": 30, "focus_area": "admin"}
    assert (body["plan"]["focus_time"], body["plan"]["break_time"]) == (22, 8)
    assert [task["source_task_id"] for task in body["plan"]["tasks"]] == [task_id]


def test_plan_from_empty_text_uses_defaults(client):
    test_client, _ = client

    response = test_client.post("/focus/plan/query", json={})

    assert response.status_code == 200
    assert response.json()["parsed"] == {"energy_level": "balanced", "time_available": 30, "focus_area": "any"}
