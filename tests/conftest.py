import os

# Antes de importar la app: base de datos en memoria
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.db.session import Base, SessionLocal
from app.db.models import _all  # noqa: F401
from app.db.models.event import Event
from app.db.models.team import Team
from app.db.models.user import User
from app.core.security import create_access_token, hash_password
from app.services.roles import assign_roles

TEST_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def engine():
    # Base de datos nueva para cada test
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    SessionLocal.configure(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db(engine):
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    from main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(name: str, roles=(), email: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            name=name,
            hashed_password=hash_password(TEST_PASSWORD),
        )
        db.add(user)
        db.commit()
        if roles:
            assign_roles(db, user, roles)
        return user

    return _make_user


@pytest.fixture
def make_team(db):
    def _make_team(name: str, manager: User, drivers=(), social_media: User | None = None) -> Team:
        team = Team(name=name, manager_id=manager.id, social_media_id=social_media.id if social_media else None)
        db.add(team)
        db.flush()
        for driver in drivers:
            driver.team_id = team.id
        db.commit()
        return team

    return _make_team


@pytest.fixture
def make_event(db):
    def _make_event(
        when: datetime,
        drivers=(),
        type: str = "sprint",
        manager: User | None = None,
        team: Team | None = None,
        title: str | None = None,
    ) -> Event:
        event = Event(
            title=title,
            date=when,
            type=type,
            car="Porsche 911 GT3 R",
            track="Spa-Francorchamps",
            duration=60,
            manager_id=manager.id if manager else None,
            team_id=team.id if team else None,
        )
        event.drivers = list(drivers)
        db.add(event)
        db.commit()
        return event

    return _make_event


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
