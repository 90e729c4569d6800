"""Team membership — join table between users and teams.

The owner of a team never needs a row here; ownership alone grants access.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from teamtasker.infrastructure.database import Base


class TeamMember(Base):
    __tablename__ = "team_members"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True, index=True)
    # Set client-side for sub-second precision; members are listed in join order
    joined_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    user = relationship("User", lazy="joined")

    def __repr__(self):
        return f"<TeamMember team={self.team_id} user={self.user_id}>"
