"""
Session Repository Interface.
Server-side store behind the session cookie.
"""

from datetime import datetime
from typing import Optional, Protocol

from teamtasker.domain.models.user_session import UserSession


class SessionRepository(Protocol):
    """Interface for the durable session table."""

    def create(self, sid: str, user_id: int, expire: datetime) -> UserSession:
        ...

    def get_active(self, sid: str, now: datetime) -> Optional[UserSession]:
        """Session row that has not expired as of now."""
        ...

    def extend(self, session: UserSession, expire: datetime) -> None:
        ...

    def destroy(self, sid: str) -> bool:
        """Delete a session; False when it was already gone."""
        ...

    def prune_expired(self, now: datetime) -> int:
        ...
