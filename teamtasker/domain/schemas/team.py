"""Pydantic schemas for Team and TeamMember."""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)

    model_config = {"str_strip_whitespace": True}


class TeamRead(BaseModel):
    id: int
    name: str
    owner_id: int
    owner_name: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TeamListItem(TeamRead):
    is_member: bool = False


class MemberRead(BaseModel):
    id: int
    name: str
    email: str
    joined_at: Optional[datetime] = None


class TeamDetail(TeamRead):
    members: list[MemberRead] = []


class MemberAdd(BaseModel):
    email: EmailStr


class TeamListResponse(BaseModel):
    teams: list[TeamListItem]


class TeamResponse(BaseModel):
    message: Optional[str] = None
    team: TeamRead


class TeamDetailResponse(BaseModel):
    team: TeamDetail


class MessageResponse(BaseModel):
    message: str
