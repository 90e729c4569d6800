"""Task domain model — maps to the 'tasks' table."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from teamtasker.infrastructure.database import Base


class TaskStatus(str, enum.Enum):
    todo = "todo"
    in_progress = "in-progress"
    completed = "completed"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default=TaskStatus.todo.value, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignee = relationship("User", lazy="joined")
    team = relationship("Team", lazy="joined")

    @property
    def assigned_to_name(self):
        return self.assignee.name if self.assignee else None

    @property
    def assigned_to_email(self):
        return self.assignee.email if self.assignee else None

    @property
    def team_name(self):
        return self.team.name if self.team else None

    def __repr__(self):
        return f"<Task {self.id} - {self.title}>"
