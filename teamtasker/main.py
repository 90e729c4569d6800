"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from teamtasker.config import get_settings
from teamtasker.infrastructure.database import engine, Base
from teamtasker.core.logging import configure_logging
from teamtasker.core.middleware import setup_middleware
from teamtasker.core.exceptions import setup_exception_handlers

# Import all models so SQLAlchemy knows about them
from teamtasker.domain.models.user import User
from teamtasker.domain.models.team import Team
from teamtasker.domain.models.team_member import TeamMember
from teamtasker.domain.models.task import Task
from teamtasker.domain.models.user_session import UserSession

# Import routers
from teamtasker.interfaces.api.auth import router as auth_router
from teamtasker.interfaces.api.users import router as users_router
from teamtasker.interfaces.api.teams import router as teams_router
from teamtasker.interfaces.api.tasks import router as tasks_router
from teamtasker.interfaces.api.health import router as health_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting TeamTasker backend...", env=settings.ENVIRONMENT)

    # Create DB tables (dev convenience; scripts/migrate.py does the same)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    if settings.SCHEDULER_ENABLED:
        from teamtasker.scheduler.jobs import start_scheduler
        start_scheduler()

    yield

    if settings.SCHEDULER_ENABLED:
        from teamtasker.scheduler.jobs import stop_scheduler
        stop_scheduler()
    logger.info("TeamTasker backend stopped")


app = FastAPI(
    title="TeamTasker",
    description="API Backend — teams, members and team-scoped tasks",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
setup_exception_handlers(app)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(teams_router, prefix=settings.API_PREFIX)
app.include_router(tasks_router, prefix=settings.API_PREFIX)
app.include_router(health_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {
        "name": "TeamTasker",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }
