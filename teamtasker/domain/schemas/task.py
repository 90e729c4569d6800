"""Pydantic schemas for Task."""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from teamtasker.domain.models.task import TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    status: TaskStatus = TaskStatus.todo
    assigned_to: Optional[int] = None
    team_id: int
    due_date: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True, "use_enum_values": True, "validate_default": True}


class TaskUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied.

    Presence is read with ``model_dump(exclude_unset=True)`` so an explicit
    ``null`` (e.g. unassigning) stays distinct from an omitted field.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    status: Optional[TaskStatus] = None
    assigned_to: Optional[int] = None
    due_date: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True, "use_enum_values": True}

    @field_validator("title", "status")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Field may not be null")
        return value


class TaskRead(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    assigned_to: Optional[int] = None
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    team_id: int
    team_name: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TaskFilter(BaseModel):
    team_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: Optional[TaskStatus] = None

    model_config = {"use_enum_values": True}


class TaskListResponse(BaseModel):
    tasks: list[TaskRead]


class TaskResponse(BaseModel):
    message: Optional[str] = None
    task: TaskRead
