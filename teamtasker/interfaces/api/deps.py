"""FastAPI dependency — session cookie authentication."""

from typing import Optional

from fastapi import Depends, Request, Response

from teamtasker.config import get_settings
from teamtasker.application.services.session_service import resolve_principal, set_session_cookie
from teamtasker.core.exceptions import UnauthorizedException
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.session_repository import SessionRepository
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.interfaces.deps import get_session_repository, get_user_repository

settings = get_settings()


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_optional_user(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionRepository = Depends(get_session_repository),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[User]:
    """Resolve the session cookie to a user, or None for anonymous requests."""
    user = resolve_principal(sessions, users, token)
    if user is not None:
        # Sliding expiry: re-issue the cookie with a fresh max-age
        set_session_cookie(response, token)
    return user


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Reject the request with 401 unless a valid session resolves."""
    if user is None:
        raise UnauthorizedException("Unauthorized - Please login to continue")
    return user
