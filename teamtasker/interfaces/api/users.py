"""User API routes — profile."""

from fastapi import APIRouter, Depends

from teamtasker.application.services.auth_service import update_profile
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.domain.schemas.auth import UserRead, UserResponse, UserUpdate
from teamtasker.interfaces.api.deps import get_current_user
from teamtasker.interfaces.deps import get_user_repository

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/profile", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    return UserResponse(user=UserRead.model_validate(user))


@router.put("/profile", response_model=UserResponse)
def put_profile(
    body: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    user = update_profile(users, user, body.name)
    return UserResponse(message="Profile updated successfully", user=UserRead.model_validate(user))
