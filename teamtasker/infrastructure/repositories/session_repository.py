"""
SQLAlchemy Implementation of Session Repository.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from teamtasker.domain.models.user_session import UserSession
from teamtasker.domain.repositories.session_repository import SessionRepository


class SQLAlchemySessionRepository(SessionRepository):
    """Durable session store backed by the user_sessions table."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, sid: str, user_id: int, expire: datetime) -> UserSession:
        session = UserSession(sid=sid, user_id=user_id, expire=expire)
        self.db.add(session)
        self.db.commit()
        return session

    def get_active(self, sid: str, now: datetime) -> Optional[UserSession]:
        return (
            self.db.query(UserSession)
            .filter(UserSession.sid == sid, UserSession.expire > now)
            .first()
        )

    def extend(self, session: UserSession, expire: datetime) -> None:
        session.expire = expire
        self.db.commit()

    def destroy(self, sid: str) -> bool:
        deleted = self.db.query(UserSession).filter(UserSession.sid == sid).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def prune_expired(self, now: datetime) -> int:
        deleted = (
            self.db.query(UserSession)
            .filter(UserSession.expire <= now)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
