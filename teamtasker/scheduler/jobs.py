"""APScheduler jobs — periodic pruning of expired server-side sessions."""

import pytz
import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from teamtasker.config import get_settings
from teamtasker.infrastructure.database import SessionLocal

settings = get_settings()
logger = structlog.get_logger(__name__)
tz = pytz.timezone(settings.TIMEZONE)

scheduler = AsyncIOScheduler(timezone=tz)


def prune_sessions_job():
    """Delete user_sessions rows whose sliding expiry has passed."""
    from teamtasker.application.services.session_service import prune_expired_sessions
    from teamtasker.infrastructure.repositories.session_repository import SQLAlchemySessionRepository

    db = SessionLocal()
    try:
        prune_expired_sessions(SQLAlchemySessionRepository(db))
    except Exception:
        # Keep the job scheduled; the next run retries
        db.rollback()
        logger.exception("Session prune job failed")
    finally:
        db.close()


def start_scheduler():
    """Start the APScheduler with the session prune job."""
    scheduler.add_job(
        prune_sessions_job,
        trigger=IntervalTrigger(minutes=settings.SESSION_PRUNE_INTERVAL_MINUTES, timezone=tz),
        id="prune_expired_sessions",
        name="Prune expired sessions",
        replace_existing=True,
    )

    scheduler.start()
    logger.info("Scheduler started", prune_interval_minutes=settings.SESSION_PRUNE_INTERVAL_MINUTES)


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
