"""
Team Repository Interface.
Membership and visibility queries for teams.
"""

from typing import List, Optional, Tuple

from teamtasker.domain.repositories.base import BaseRepository
from teamtasker.domain.models.team import Team
from teamtasker.domain.models.team_member import TeamMember


class TeamRepository(BaseRepository[Team]):
    """Interface for Team-specific operations."""

    def has_access(self, team_id: int, user_id: int, lock: bool = False) -> bool:
        """True when user_id owns team_id or has a membership row for it."""
        ...

    def list_visible(self, user_id: int) -> List[Tuple[Team, bool]]:
        """Teams the user owns or belongs to, newest first, with an is-member flag."""
        ...

    def get_for_update(self, team_id: int) -> Optional[Team]:
        """Load a team, locking its row for the rest of the transaction."""
        ...

    def list_members(self, team_id: int) -> List[TeamMember]:
        """Membership rows of a team ordered by join time."""
        ...

    def get_member(self, team_id: int, user_id: int) -> Optional[TeamMember]:
        ...

    def add_member(self, team_id: int, user_id: int) -> TeamMember:
        ...

    def remove_member(self, member: TeamMember) -> None:
        ...

    def delete_with_dependents(self, team: Team) -> None:
        """Delete members, tasks, then the team in one transaction."""
        ...
