"""Shared pytest fixtures.

The app runs against a throwaway SQLite file. Tests seed rows through a plain
synchronous engine on the same file and talk to the API through TestClient.
"""
import os
import tempfile
import uuid
from datetime import datetime, timedelta

_DATA_DIR = tempfile.mkdtemp(prefix="statuspage-tests-")
DB_PATH = os.path.join(_DATA_DIR, "test.db")
os.environ["DATA_PATH"] = _DATA_DIR
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from app.config import settings
from app.database import Base
from app.main import app
from app.models import Alert, Monitor, Trigger, User, UserSession
from app.utils.dates import utcnow


@pytest.fixture(scope="session")
def sync_engine():
    engine = create_engine(f"sqlite:///{DB_PATH}")
    yield engine
    engine.dispose()


@pytest.fixture(autouse=True)
def fresh_db(sync_engine):
    """Start every test from empty tables."""
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def db_session(sync_engine):
    with Session(sync_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client, db_session):
    """Create a user with ``role`` and attach its session cookie to the client."""

    def _login(role: str = "admin", expires_in: timedelta = timedelta(hours=1)) -> User:
        user = User(email=f"{role}-{uuid.uuid4().hex[:8]}@example.com", name=role.title(), role=role)
        session = UserSession(
            token=uuid.uuid4().hex,
            user=user,
            expires_at=utcnow() + expires_in,
        )
        db_session.add_all([user, session])
        db_session.commit()
        client.cookies.set(settings.session_cookie_name, session.token)
        return user

    return _login


@pytest.fixture
def make_monitor(db_session):
    def _make(tag: str = "api-server", name: str = "API Server", **fields) -> Monitor:
        monitor = Monitor(tag=tag, name=name, monitor_type=fields.pop("monitor_type", "API"), **fields)
        db_session.add(monitor)
        db_session.commit()
        return monitor

    return _make


@pytest.fixture
def make_trigger(db_session):
    def _make(name: str = "Ops Webhook", **fields) -> Trigger:
        values = {
            "trigger_type": "webhook",
            "trigger_desc": "",
            "trigger_status": "ACTIVE",
            "trigger_meta": '{"url": "https://hooks.example.com/ops"}',
        }
        values.update(fields)
        trigger = Trigger(name=name, **values)
        db_session.add(trigger)
        db_session.commit()
        return trigger

    return _make


@pytest.fixture
def make_alerts(db_session):
    """Insert ``count`` alerts for a monitor, one minute apart, oldest first."""

    def _make(monitor: Monitor, count: int, alert_type: str = "down") -> list:
        start = datetime(2024, 1, 1, 12, 0, 0)
        alerts = [
            Alert(
                monitor_id=monitor.id,
                alert_type=alert_type,
                alert_status="TRIGGERED",
                severity="critical",
                created_at=start + timedelta(minutes=i),
                updated_at=start + timedelta(minutes=i),
            )
            for i in range(count)
        ]
        db_session.add_all(alerts)
        db_session.commit()
        return alerts

    return _make
