"""Auth API routes — register, login, logout, me."""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from teamtasker.application.services.auth_service import register_user, verify_credentials
from teamtasker.application.services.session_service import (
    clear_session_cookie,
    create_session,
    destroy_session,
    set_session_cookie,
)
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.session_repository import SessionRepository
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.domain.schemas.auth import LoginRequest, UserCreate, UserRead, UserResponse
from teamtasker.domain.schemas.team import MessageResponse
from teamtasker.interfaces.api.deps import get_current_user, get_session_token
from teamtasker.interfaces.deps import get_session_repository, get_user_repository

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, users: UserRepository = Depends(get_user_repository)):
    user = register_user(users, body)
    return UserResponse(message="User registered successfully", user=UserRead.model_validate(user))


@router.post("/login", response_model=UserResponse)
def login(
    body: LoginRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    user = verify_credentials(users, body.email, body.password)
    set_session_cookie(response, create_session(sessions, user))
    return UserResponse(message="Login successful", user=UserRead.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionRepository = Depends(get_session_repository),
):
    # Idempotent: logging out without a live session still succeeds
    destroy_session(sessions, token)
    clear_session_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return UserResponse(user=UserRead.model_validate(user))
