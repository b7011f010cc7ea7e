"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gymflow.db.models import Base, Category, Exercise, Log
from gymflow.db.session import _enable_sqlite_foreign_keys


@pytest.fixture
def db_engine():
    """Isolated in-memory SQLite engine with the schema created.

    StaticPool keeps one shared connection so every session (including the
    ones FastAPI opens in its worker threads) sees the same in-memory data.
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(db_engine, monkeypatch):
    """Session on the test engine, with gymflow.db.session patched to use it.

    Usage:
        def test_something(db_session):
            db_session.add(Category(name="Core", color="#EF4444"))
            db_session.commit()
    """
    session_factory = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    monkeypatch.setattr("gymflow.db.session._get_engine", lambda: db_engine)
    monkeypatch.setattr("gymflow.db.session._get_session_local", lambda: session_factory)

    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """TestClient for the API; request sessions come from the patched factory."""
    from gymflow.main import create_app

    with TestClient(create_app(run_lifespan=False)) as test_client:
        yield test_client


@pytest.fixture
def category(db_session) -> Category:
    category = Category(name="Upper Body", color="#3B82F6", sort_order=1)
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def make_exercise(db_session, category):
    """Factory creating an exercise in the default category."""

    def _make(template_type: str = "strength", name: str = "Bench Press") -> Exercise:
        exercise = Exercise(category_id=category.id, name=name, template_type=template_type)
        db_session.add(exercise)
        db_session.commit()
        return exercise

    return _make


@pytest.fixture
def add_logs(db_session):
    """Factory inserting logs oldest-first so the last tuple given is the newest."""

    def _add(exercise: Exercise, tuples: Iterable[tuple]) -> list[Log]:
        logs = []
        start = datetime(2025, 1, 1, 7, 0, tzinfo=timezone.utc)
        for i, values in enumerate(tuples):
            padded = (list(values) + [None] * 4)[:4]
            log = Log(
                exercise_id=exercise.id,
                metric_1=padded[0],
                metric_2=padded[1],
                metric_3=padded[2],
                metric_4=padded[3],
                created_at=start + timedelta(days=i),
            )
            db_session.add(log)
            db_session.flush()
            logs.append(log)
        db_session.commit()
        return logs

    return _add

