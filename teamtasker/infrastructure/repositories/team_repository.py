"""
SQLAlchemy Implementation of Team Repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from teamtasker.domain.models.task import Task
from teamtasker.domain.models.team import Team
from teamtasker.domain.models.team_member import TeamMember
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.infrastructure.repositories.access import team_access_clause
from teamtasker.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyTeamRepository(SQLAlchemyRepository[Team], TeamRepository):
    """Team repository implementation using SQLAlchemy."""

    def __init__(self, db: Session, model=Team):
        super().__init__(db, model)

    def has_access(self, team_id: int, user_id: int, lock: bool = False) -> bool:
        stmt = select(Team.id).where(Team.id == team_id, team_access_clause(user_id))
        if lock:
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).first() is not None

    def list_visible(self, user_id: int) -> List[Tuple[Team, bool]]:
        rows = (
            self.db.query(Team, TeamMember.user_id)
            .outerjoin(
                TeamMember,
                and_(TeamMember.team_id == Team.id, TeamMember.user_id == user_id),
            )
            .filter(team_access_clause(user_id))
            .order_by(Team.created_at.desc(), Team.id.desc())
            .all()
        )
        return [(team, member_id is not None) for team, member_id in rows]

    def get_for_update(self, team_id: int) -> Optional[Team]:
        # Lock only the bare team row; eager-loaded outer joins cannot be locked
        locked = self.db.execute(
            select(Team.id).where(Team.id == team_id).with_for_update()
        ).first()
        if locked is None:
            return None
        return self.db.get(Team, team_id)

    def list_members(self, team_id: int) -> List[TeamMember]:
        return (
            self.db.query(TeamMember)
            .filter(TeamMember.team_id == team_id)
            .order_by(TeamMember.joined_at.asc(), TeamMember.user_id.asc())
            .all()
        )

    def get_member(self, team_id: int, user_id: int) -> Optional[TeamMember]:
        return self.db.get(TeamMember, {"user_id": user_id, "team_id": team_id})

    def add_member(self, team_id: int, user_id: int) -> TeamMember:
        member = TeamMember(team_id=team_id, user_id=user_id)
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def remove_member(self, member: TeamMember) -> None:
        self.db.delete(member)
        self.db.commit()

    def delete_with_dependents(self, team: Team) -> None:
        self.db.query(TeamMember).filter(TeamMember.team_id == team.id).delete(synchronize_session=False)
        self.db.query(Task).filter(Task.team_id == team.id).delete(synchronize_session=False)
        self.db.delete(team)
        self.db.commit()
