"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vocabcoach import models  # noqa: F401  registers tables on Base.metadata
from vocabcoach.config import configure_logging, get_settings
from vocabcoach.core import container
from vocabcoach.database import Base, dispose_engine, get_engine, initialize_database
from vocabcoach.infrastructure.questions.routers import question_sessions

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Set up the document store database for the lifetime of the app."""
    current = get_settings()
    session_factory = initialize_database(current)
    Base.metadata.create_all(bind=get_engine())
    container.session_factory.override(session_factory)
    logger.info(
        "application_started",
        environment=current.ENVIRONMENT,
        ai_grading=current.ai_enabled,
    )
    try:
        yield
    finally:
        container.reset_singletons()
        container.session_factory.reset_override()
        dispose_engine()
        logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url=f"{settings.API_V1_PREFIX}/docs",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(question_sessions.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@app.get(f"{settings.API_V1_PREFIX}/")
async def api_root() -> dict[str, str]:
    return {
        "message": f"{settings.PROJECT_NAME} v1",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_PREFIX}/docs",
    }


def run() -> None:
    """Serve the API with uvicorn."""
    current = get_settings()
    uvicorn.run("vocabcoach.main:app", host=current.HOST, port=current.PORT)


if __name__ == "__main__":
    run()
