"""Health check — confirms the database answers."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from teamtasker.config import get_settings
from teamtasker.infrastructure.database import get_db

settings = get_settings()
logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        timestamp = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as exc:
        logger.error("Database health check failed", error=str(exc))
        body = {"status": "unhealthy"}
        if not settings.is_production:
            body["error"] = str(exc)
        return JSONResponse(status_code=500, content=body)

    return {
        "status": "healthy",
        "timestamp": str(timestamp),
        "environment": settings.ENVIRONMENT,
    }
