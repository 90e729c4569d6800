"""
SQLAlchemy Implementation of Task Repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from teamtasker.domain.models.task import Task
from teamtasker.domain.repositories.task_repository import TaskRepository
from teamtasker.domain.schemas.task import TaskFilter
from teamtasker.infrastructure.repositories.access import team_access_clause
from teamtasker.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTaskRepository(SQLAlchemyRepository[Task], TaskRepository):
    """Task repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=Task):
        super().__init__(db, model)

    def list_visible(self, user_id: int, filters: TaskFilter) -> List[Task]:
        query = self.db.query(Task).filter(team_access_clause(user_id, Task.team_id))

        if filters.team_id is not None:
            query = query.filter(Task.team_id == filters.team_id)
        if filters.assigned_to is not None:
            query = query.filter(Task.assigned_to == filters.assigned_to)
        if filters.status is not None:
            query = query.filter(Task.status == filters.status)

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def get_visible(self, task_id: int, user_id: int, lock: bool = False) -> Optional[Task]:
        stmt = select(Task.id).where(Task.id == task_id, team_access_clause(user_id, Task.team_id))
        if lock:
            stmt = stmt.with_for_update()
        if self.db.execute(stmt).first() is None:
            return None
        return self.db.get(Task, task_id)

    def touch(self, task: Task, changes: dict) -> Task:
        for field, value in changes.items():
            setattr(task, field, value)
        task.updated_at = func.now()

        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task
