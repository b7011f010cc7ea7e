from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from fastapi import HTTPException
from loguru import logger
from sqlalchemy import create_engine, event, select
from sqlalchemy.orm import Session, sessionmaker

from gymflow.config.settings import settings
from gymflow.db.models import Base, Category, Exercise
from gymflow.errors import NotFoundError, TemplateTypeLockedError

# Lazy initialization to avoid import-time database connections
_engine = None
_SessionLocal = None


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    """Enable foreign key constraints (cascading deletes) in SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _get_engine():
    """Get or create the database engine (lazy initialization)."""
    global _engine
    if _engine is None:
        logger.info(f"Initializing database engine: {settings.database_url}")

        connect_args = {}
        is_sqlite = "sqlite" in settings.database_url.lower()
        if is_sqlite:
            connect_args = {"check_same_thread": False}

        _engine = create_engine(
            settings.database_url,
            connect_args=connect_args,
            echo=False,
            pool_pre_ping=True,
        )
        if is_sqlite:
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Database engine initialized")
    return _engine


def get_engine():
    """Get or create the database engine (public API)."""
    return _get_engine()


def _get_session_local():
    """Get or create the session factory (lazy initialization)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
        logger.info("Database session factory initialized")
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Get database session for FastAPI dependencies.

    This is a plain generator function (NOT a context manager) that FastAPI
    can use directly with Depends(). Routes commit their own writes.

    For non-FastAPI code that needs a context manager, use get_session() instead.

    Yields:
        Session: SQLAlchemy database session
    """
    session = _get_session_local()()
    try:
        yield session
    finally:
        session.close()


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Get database session context manager.

    Commits on clean exit. On error the session is rolled back and the
    exception re-raised; HTTP and domain errors are expected outcomes and are
    not logged as database errors.
    """
    session = _get_session_local()()
    try:
        yield session
        if session.dirty or session.new or session.deleted:
            session.commit()
    except (HTTPException, NotFoundError, TemplateTypeLockedError):
        session.rollback()
        raise
    except Exception as e:
        logger.error(f"Database session error, rolling back: {type(e).__name__}: {e}")
        session.rollback()
        raise
    finally:
        session.close()


DEFAULT_CATALOG: list[tuple[str, str, list[tuple[str, str]]]] = [
    ("Upper Body", "#3B82F6", [("Bench Press", "strength"), ("Pull-ups", "bodyweight")]),
    ("Lower Body", "#10B981", [("Squats", "strength"), ("Deadlift", "strength")]),
    ("Cardio", "#F59E0B", [("Running", "cardio"), ("Cycling", "cardio"), ("Rowing Machine", "cardio_machine")]),
    ("Core", "#EF4444", [("Plank", "timed"), ("Crunches", "bodyweight")]),
]


def seed_defaults(session: Session) -> bool:
    """Insert the default categories and exercises into an empty database.

    Returns:
        True if seed data was inserted, False if categories already existed
    """
    if session.execute(select(Category.id).limit(1)).first() is not None:
        return False

    for sort_order, (name, color, exercises) in enumerate(DEFAULT_CATALOG, start=1):
        category = Category(name=name, color=color, sort_order=sort_order)
        category.exercises = [Exercise(name=ex_name, template_type=template) for ex_name, template in exercises]
        session.add(category)
    session.flush()
    logger.info(f"Seeded {len(DEFAULT_CATALOG)} default categories")
    return True


def init_db(seed: bool | None = None) -> None:
    """Create tables and optionally seed defaults."""
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=_get_engine())
    if seed is None:
        seed = settings.seed_defaults
    if seed:
        with get_session() as session:
            seed_defaults(session)
    logger.info("Database ready")
