from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from loguru import logger

from gymflow.api.categories import router as categories_router
from gymflow.api.exercise_history import router as exercise_history_router
from gymflow.api.exercises import router as exercises_router
from gymflow.api.logs import router as logs_router
from gymflow.api.progress import router as progress_router
from gymflow.core.logger import setup_logger
from gymflow.db.session import init_db

setup_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables (and seed defaults) before serving requests."""
    init_db()
    yield
    logger.info("GymFlow shutting down")


def create_app(*, run_lifespan: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        run_lifespan: Whether startup initializes the database. Tests that
            provide their own session pass False.
    """
    application = FastAPI(title="GymFlow", lifespan=lifespan if run_lifespan else None)
    application.include_router(categories_router)
    application.include_router(exercises_router)
    application.include_router(logs_router)
    application.include_router(exercise_history_router)
    application.include_router(progress_router)

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    return application


app = create_app()

logger.info("FastAPI application initialized")
