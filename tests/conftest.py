# tests/conftest.py

import os

# must be set before attendly.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RSVP_TRANSITIONS", "free")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from attendly.db import Base, get_db
from attendly.main import app
from attendly.services.invitation_store import InvitationStore
from attendly.services.invitations import InvitationService
from attendly.services.rsvp import RsvpTransitions

# --- in-memory test database, one connection shared by every session ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- service fixtures ---
class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start=datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


def fake_qr(invitation_id):
    return f"data:image/png;base64,QR-{invitation_id}"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db_session, clock):
    return InvitationService(
        InvitationStore(db_session),
        qr_encoder=fake_qr,
        transitions=RsvpTransitions("free"),
        clock=clock,
    )


@pytest.fixture
def guarded_service(db_session, clock):
    return InvitationService(
        InvitationStore(db_session),
        qr_encoder=fake_qr,
        transitions=RsvpTransitions("guarded"),
        clock=clock,
    )


# --- API client backed by the test database ---
@pytest.fixture(scope="function")
def test_client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def invitation_payload():
    return {
        "name": "A",
        "eventDate": "2026-05-23T15:00",
        "venue": "V",
        "plusOne": 1,
    }
