"""Tests for application wiring: health check, error shapes, startup migration."""
from fastapi.testclient import TestClient
from sqlalchemy import inspect, text

from app.main import app, create_app
from app.models import Monitor
from app.schemas.trigger import TriggerUpdate


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}


def test_startup_adds_missing_binding_columns(sync_engine):
    with sync_engine.begin() as conn:
        conn.execute(text("DROP TABLE alerts"))
        conn.execute(text("DROP TABLE monitors"))
        conn.execute(text(
            "CREATE TABLE monitors (id INTEGER PRIMARY KEY, tag VARCHAR NOT NULL, "
            "name VARCHAR NOT NULL, description VARCHAR, monitor_type VARCHAR NOT NULL, "
            "created_at DATETIME)"
        ))

    with TestClient(app):
        pass

    columns = {col["name"] for col in inspect(sync_engine).get_columns("monitors")}
    assert {"down_trigger", "degraded_trigger"} <= columns


def test_monitor_columns():
    assert set(Monitor.__table__.columns.keys()) == {
        "id", "tag", "name", "description", "monitor_type",
        "down_trigger", "degraded_trigger", "created_at",
    }


def test_model_validation_errors_are_bad_requests():
    strict_app = create_app()

    @strict_app.get("/strict")
    async def strict():
        TriggerUpdate.model_validate({"trigger_status": "PAUSED"})

    with TestClient(strict_app) as client:
        resp = client.get("/strict")

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("trigger_status: ")
