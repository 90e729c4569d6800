"""Teams API routes — list, detail, create, membership, delete."""

from fastapi import APIRouter, Depends, status

from teamtasker.application.services import team_service
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.domain.schemas.team import (
    MemberAdd,
    MessageResponse,
    TeamCreate,
    TeamDetailResponse,
    TeamListResponse,
    TeamRead,
    TeamResponse,
)
from teamtasker.interfaces.api.deps import get_current_user
from teamtasker.interfaces.deps import get_team_repository, get_user_repository

router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get("", response_model=TeamListResponse)
def list_teams(
    repo: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    return TeamListResponse(teams=team_service.list_visible_teams(repo, user))


@router.get("/{team_id}", response_model=TeamDetailResponse)
def get_team(
    team_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    return TeamDetailResponse(team=team_service.get_team_detail(repo, user, team_id))


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
def create_team(
    body: TeamCreate,
    repo: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    team = team_service.create_team(repo, user, body.name)
    return TeamResponse(message="Team created successfully", team=TeamRead.model_validate(team))


@router.post("/{team_id}/members", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_member(
    team_id: int,
    body: MemberAdd,
    repo: TeamRepository = Depends(get_team_repository),
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    team_service.add_member(repo, users, user, team_id, body.email)
    return MessageResponse(message="Member added successfully")


@router.delete("/{team_id}/members/{user_id}", response_model=MessageResponse)
def remove_member(
    team_id: int,
    user_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    team_service.remove_member(repo, user, team_id, user_id)
    return MessageResponse(message="Member removed successfully")


@router.delete("/{team_id}", response_model=MessageResponse)
def delete_team(
    team_id: int,
    repo: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    team_service.delete_team(repo, user, team_id)
    return MessageResponse(message="Team deleted successfully")
