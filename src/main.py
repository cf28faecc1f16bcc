"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.router import api_router
from src.config import settings
from src.db.turso import TursoClient
from src.mail.dispatcher import MinuteNotifier
from src.repositories import Repositories

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Create tables for every repository
    - Bind the minute notifier to the user store

    Shutdown:
    - Close database connection
    """
    logger.info("Starting Minutes Manager...")

    db = TursoClient()
    await db.connect()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    repos = Repositories(db)
    await repos.initialize()
    app.state.repos = repos
    logger.info("Repositories initialized")

    app.state.notifier = MinuteNotifier(repos.users)
    if not settings.smtp_host:
        logger.warning("SMTP_HOST not set, minute notifications will fail")

    yield

    logger.info("Shutting down Minutes Manager...")
    await db.close()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Meeting minutes with email notifications",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
