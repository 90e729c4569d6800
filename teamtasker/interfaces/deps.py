"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from teamtasker.infrastructure.database import get_db
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.session_repository import SessionRepository
from teamtasker.domain.repositories.task_repository import TaskRepository
from teamtasker.domain.repositories.team_repository import TeamRepository
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.infrastructure.repositories.session_repository import SQLAlchemySessionRepository
from teamtasker.infrastructure.repositories.task_repository import SQLAlchemyTaskRepository
from teamtasker.infrastructure.repositories.team_repository import SQLAlchemyTeamRepository
from teamtasker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_session_repository(db: Session = Depends(get_db)) -> SessionRepository:
    """Get session store instance."""
    return SQLAlchemySessionRepository(db)


def get_team_repository(db: Session = Depends(get_db)) -> TeamRepository:
    """Get team repository instance."""
    return SQLAlchemyTeamRepository(db)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    """Get task repository instance."""
    return SQLAlchemyTaskRepository(db)
