"""Tasks API routes — list, fetch, create, update, delete."""

from typing import Optional

from fastapi import APIRouter, Depends, status

from teamtasker.application.services import task_service
from teamtasker.domain.models.task import TaskStatus
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.task_repository import TaskRepository
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.domain.schemas.task import (
    TaskCreate,
    TaskFilter,
    TaskListResponse,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from teamtasker.domain.schemas.team import MessageResponse
from teamtasker.interfaces.api.deps import get_current_user
from teamtasker.interfaces.deps import get_task_repository, get_team_repository

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(
    team_id: Optional[int] = None,
    assigned_to: Optional[int] = None,
    status: Optional[TaskStatus] = None,
    repo: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    filters = TaskFilter(team_id=team_id, assigned_to=assigned_to, status=status)
    tasks = task_service.list_visible_tasks(repo, user, filters)
    return TaskListResponse(tasks=[TaskRead.model_validate(t) for t in tasks])


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    repo: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    task = task_service.get_visible_task(repo, user, task_id)
    return TaskResponse(task=TaskRead.model_validate(task))


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    body: TaskCreate,
    repo: TaskRepository = Depends(get_task_repository),
    teams: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    task = task_service.create_task(repo, teams, user, body)
    return TaskResponse(message="Task created successfully", task=TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    body: TaskUpdate,
    repo: TaskRepository = Depends(get_task_repository),
    teams: TeamRepository = Depends(get_team_repository),
    user: User = Depends(get_current_user),
):
    task = task_service.update_task(repo, teams, user, task_id, body)
    return TaskResponse(message="Task updated successfully", task=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    repo: TaskRepository = Depends(get_task_repository),
    user: User = Depends(get_current_user),
):
    task_service.delete_task(repo, user, task_id)
    return MessageResponse(message="Task deleted successfully")
