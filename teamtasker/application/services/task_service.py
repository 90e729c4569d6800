"""Task service — visibility-gated task reads and writes.

A task is reachable only through its team: the caller must own the team or be
a member of it. Tasks the caller cannot see are reported as not found so
their existence does not leak. Any team participant may update or delete a
task; there is no owner-only restriction here.
"""

from typing import List

import structlog

from teamtasker.core.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ForbiddenException,
)
from teamtasker.domain.models.task import Task
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.task_repository import TaskRepository
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.domain.schemas.task import TaskCreate, TaskFilter, TaskUpdate

logger = structlog.get_logger(__name__)

TASK_NOT_FOUND = "Task not found"
ASSIGNEE_NOT_MEMBER = "Assigned user must be a team member"


def _check_assignee(teams: TeamRepository, team_id: int, assigned_to) -> None:
    # Data-integrity check on the target user, hence 400 rather than 403
    if assigned_to is not None and not teams.has_access(team_id, assigned_to):
        raise BusinessRuleViolationException(
            ASSIGNEE_NOT_MEMBER,
            details={"assigned_to": assigned_to, "team_id": team_id},
        )


def list_visible_tasks(repo: TaskRepository, principal: User, filters: TaskFilter) -> List[Task]:
    return repo.list_visible(principal.id, filters)


def get_visible_task(repo: TaskRepository, principal: User, task_id: int) -> Task:
    task = repo.get_visible(task_id, principal.id)
    if task is None:
        raise EntityNotFoundException(TASK_NOT_FOUND)
    return task


def create_task(repo: TaskRepository, teams: TeamRepository, principal: User, body: TaskCreate) -> Task:
    if not teams.has_access(body.team_id, principal.id, lock=True):
        logger.info("Team access denied", team_id=body.team_id, user_id=principal.id)
        raise ForbiddenException("Access denied to this team")

    _check_assignee(teams, body.team_id, body.assigned_to)

    task = repo.create(body.model_dump())
    logger.info("Task created", task_id=task.id, team_id=task.team_id, user_id=principal.id)
    return task


def update_task(
    repo: TaskRepository,
    teams: TeamRepository,
    principal: User,
    task_id: int,
    body: TaskUpdate,
) -> Task:
    task = repo.get_visible(task_id, principal.id, lock=True)
    if task is None:
        raise EntityNotFoundException(TASK_NOT_FOUND)

    changes = body.model_dump(exclude_unset=True)
    if "assigned_to" in changes:
        _check_assignee(teams, task.team_id, changes["assigned_to"])

    task = repo.touch(task, changes)
    logger.info("Task updated", task_id=task.id, fields=sorted(changes), user_id=principal.id)
    return task


def delete_task(repo: TaskRepository, principal: User, task_id: int) -> None:
    task = repo.get_visible(task_id, principal.id, lock=True)
    if task is None:
        raise EntityNotFoundException(TASK_NOT_FOUND)

    repo.delete(task.id)
    logger.info("Task deleted", task_id=task_id, user_id=principal.id)
