"""
User Repository Interface.
"""

from typing import Optional

from teamtasker.domain.repositories.base import BaseRepository
from teamtasker.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Exact (case-sensitive) lookup on the unique email column."""
        ...
