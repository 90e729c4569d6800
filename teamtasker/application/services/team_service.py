"""Team service — team visibility, creation, membership and deletion.

Reads are open to the owner and members. Membership changes and deletion are
owner-only. Unlike tasks, a missing team (404) and a team the caller cannot
touch (403) are reported differently.
"""

from typing import List

import structlog
from sqlalchemy.exc import IntegrityError

from teamtasker.core.exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    EntityNotFoundException,
    ForbiddenException,
)
from teamtasker.domain.models.team import Team
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.domain.schemas.team import MemberRead, TeamDetail, TeamListItem

logger = structlog.get_logger(__name__)


def list_visible_teams(repo: TeamRepository, principal: User) -> List[TeamListItem]:
    items = []
    for team, is_member in repo.list_visible(principal.id):
        item = TeamListItem.model_validate(team)
        item.is_member = is_member
        items.append(item)
    return items


def get_team_detail(repo: TeamRepository, principal: User, team_id: int) -> TeamDetail:
    team = repo.get_by_id(team_id)
    if team is None:
        raise EntityNotFoundException("Team not found")

    if not repo.has_access(team_id, principal.id):
        raise ForbiddenException("Access denied")

    detail = TeamDetail.model_validate(team)
    detail.members = [
        MemberRead(id=m.user.id, name=m.user.name, email=m.user.email, joined_at=m.joined_at)
        for m in repo.list_members(team_id)
    ]
    return detail


def create_team(repo: TeamRepository, principal: User, name: str) -> Team:
    # The owner gets no membership row; ownership alone grants access
    team = repo.create({"name": name, "owner_id": principal.id})
    logger.info("Team created", team_id=team.id, owner_id=principal.id)
    return team


def _require_owned_team(repo: TeamRepository, principal: User, team_id: int, action: str) -> Team:
    team = repo.get_for_update(team_id)
    if team is None:
        raise EntityNotFoundException("Team not found")
    if team.owner_id != principal.id:
        raise ForbiddenException(f"Only team owner can {action}")
    return team


def add_member(repo: TeamRepository, users: UserRepository, principal: User, team_id: int, email: str) -> None:
    team = _require_owned_team(repo, principal, team_id, "add members")

    user = users.get_by_email(email)
    if user is None:
        raise EntityNotFoundException("User with this email not found")

    if repo.get_member(team.id, user.id) is not None:
        raise ConflictException("User is already a team member", status_code=400)

    try:
        repo.add_member(team.id, user.id)
    except IntegrityError:
        repo.db.rollback()
        raise ConflictException("User is already a team member")

    logger.info("Member added", team_id=team.id, user_id=user.id)


def remove_member(repo: TeamRepository, principal: User, team_id: int, user_id: int) -> None:
    team = repo.get_for_update(team_id)
    if team is None:
        raise EntityNotFoundException("Team not found")

    # The owner is never removable, whoever asks
    if user_id == team.owner_id:
        raise BusinessRuleViolationException("Cannot remove team owner")

    if team.owner_id != principal.id:
        raise ForbiddenException("Only team owner can remove members")

    member = repo.get_member(team.id, user_id)
    if member is None:
        raise EntityNotFoundException("Member not found")

    repo.remove_member(member)
    logger.info("Member removed", team_id=team.id, user_id=user_id)


def delete_team(repo: TeamRepository, principal: User, team_id: int) -> None:
    team = _require_owned_team(repo, principal, team_id, "delete team")
    repo.delete_with_dependents(team)
    logger.info("Team deleted", team_id=team_id, owner_id=principal.id)
