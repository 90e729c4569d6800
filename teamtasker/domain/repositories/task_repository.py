"""
Task Repository Interface.
Every read goes through the team visibility predicate.
"""

from typing import List, Optional

from teamtasker.domain.repositories.base import BaseRepository
from teamtasker.domain.models.task import Task
from teamtasker.domain.schemas.task import TaskFilter


class TaskRepository(BaseRepository[Task]):
    """Interface for Task-specific operations."""

    def list_visible(self, user_id: int, filters: TaskFilter) -> List[Task]:
        """Tasks in teams visible to the user, narrowed by exact-match filters, newest first."""
        ...

    def get_visible(self, task_id: int, user_id: int, lock: bool = False) -> Optional[Task]:
        """Single task, or None when it does not exist or is not visible."""
        ...

    def touch(self, task: Task, changes: dict) -> Task:
        """Apply a partial update and refresh updated_at."""
        ...
