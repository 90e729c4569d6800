"""Auth service — password hashing, credential checks and registration."""

from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from teamtasker.config import get_settings
from teamtasker.core.exceptions import ConflictException, UnauthorizedException
from teamtasker.domain.models.user import User
from teamtasker.domain.repositories.user_repository import UserRepository
from teamtasker.domain.schemas.auth import UserCreate

settings = get_settings()
logger = structlog.get_logger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def authenticate_user(repo: UserRepository, email: str, password: str) -> Optional[User]:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password):
        return None
    return user


def verify_credentials(repo: UserRepository, email: str, password: str) -> User:
    """Return the user for a valid email/password pair or raise UnauthorizedException."""
    user = authenticate_user(repo, email, password)
    if user is None:
        logger.info("Login failed")
        raise UnauthorizedException(INVALID_CREDENTIALS)
    return user


def register_user(repo: UserRepository, body: UserCreate) -> User:
    if repo.get_by_email(body.email):
        raise ConflictException("Email already registered")

    try:
        user = repo.create({
            "name": body.name,
            "email": body.email,
            "password": hash_password(body.password),
        })
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        repo.db.rollback()
        raise ConflictException("Email already registered")

    logger.info("User registered", user_id=user.id)
    return user


def update_profile(repo: UserRepository, user: User, name: str) -> User:
    user = repo.update(user, {"name": name})
    logger.info("Profile updated", user_id=user.id)
    return user
