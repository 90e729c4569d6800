"""
Team visibility predicate.

A user may see or change team-scoped data for team T iff they own T or hold a
TeamMember row for T. Every team and task query builds its WHERE clause from
``team_access_clause`` so the rule lives in exactly one place.
"""

from sqlalchemy import or_, select
from sqlalchemy.sql.elements import ColumnElement

from teamtasker.domain.models.team import Team
from teamtasker.domain.models.team_member import TeamMember


def member_team_ids(user_id: int):
    return select(TeamMember.team_id).where(TeamMember.user_id == user_id).correlate(None)


def owned_team_ids(user_id: int):
    # Never correlate with an enclosing query over teams
    return select(Team.id).where(Team.owner_id == user_id).correlate(None)


def team_access_clause(user_id: int, team_id_column=None) -> ColumnElement[bool]:
    """Boolean clause over ``team_id_column`` (defaults to ``Team.id``)."""
    if team_id_column is None:
        team_id_column = Team.id
    return or_(
        team_id_column.in_(member_team_ids(user_id)),
        team_id_column.in_(owned_team_ids(user_id)),
    )
