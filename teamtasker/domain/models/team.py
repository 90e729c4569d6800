"""Team domain model — maps to the 'teams' table."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from teamtasker.infrastructure.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", lazy="joined")

    @property
    def owner_name(self):
        return self.owner.name if self.owner else None

    def __repr__(self):
        return f"<Team {self.id} - {self.name}>"
