"""Session service — server-side sessions behind a signed cookie.

The cookie holds only a session id, signed as an HS256 JWT. The
``user_sessions`` row is authoritative: deleting it logs the user out even if
the cookie is still around, and its ``expire`` slides forward on every
authenticated request.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from fastapi import Response
from jose import JWTError, jwt

from teamtasker.config import get_settings
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.session_repository import SessionRepository
from teamtasker.domain.repositories.user_repository import UserRepository

settings = get_settings()
logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def session_expiry(now: Optional[datetime] = None) -> datetime:
    return (now or utcnow()) + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)


def sign_session_id(sid: str) -> str:
    return jwt.encode({"sid": sid}, settings.SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def read_session_id(token: Optional[str]) -> Optional[str]:
    """Return the session id from a cookie value, or None if it is missing or tampered with."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) else None


def create_session(repo: SessionRepository, user: User) -> str:
    """Open a new session for user and return the signed cookie value."""
    sid = uuid.uuid4().hex
    repo.create(sid=sid, user_id=user.id, expire=session_expiry())
    logger.info("Session created", user_id=user.id)
    return sign_session_id(sid)


def resolve_principal(
    sessions: SessionRepository,
    users: UserRepository,
    token: Optional[str],
) -> Optional[User]:
    """Turn a cookie value into the current user, extending the session on success."""
    sid = read_session_id(token)
    if sid is None:
        return None

    now = utcnow()
    session = sessions.get_active(sid, now)
    if session is None:
        return None

    user = users.get_by_id(session.user_id)
    if user is None:
        return None

    sessions.extend(session, session_expiry(now))
    return user


def destroy_session(repo: SessionRepository, token: Optional[str]) -> None:
    """Invalidate the session behind token; unknown or missing sessions are ignored."""
    sid = read_session_id(token)
    if sid is None:
        return
    if repo.destroy(sid):
        logger.info("Session destroyed")


def prune_expired_sessions(repo: SessionRepository) -> int:
    removed = repo.prune_expired(utcnow())
    if removed:
        logger.info("Expired sessions pruned", count=removed)
    return removed


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="none" if settings.is_production else "lax",
    )
