import os

# Must be set before the application modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCORE_REPORTING", "0")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")

import numpy as np
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.scheduler import Scheduler
from database.config import get_db
from database.models import Base
from domain.game import Game
from main import app


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_game(clock):
    def _make_game(difficulty="beginner", seed=1234, **kwargs):
        return Game(
            difficulty=difficulty,
            rng=np.random.default_rng(seed),
            scheduler=Scheduler(clock),
            **kwargs,
        )
    return _make_game


@pytest.fixture
def game(make_game):
    return make_game()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(session_factory):
    """Client whose database rejects every commit."""
    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    def override_get_db():
        session = session_factory()
        session.commit = failing_commit
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
