from datetime import datetime, timedelta, timezone

from jose import jwt

from teamtasker.application.services import session_service
from teamtasker.domain.models.user import User
from teamtasker.domain.models.user_session import UserSession
from teamtasker.infrastructure.repositories.session_repository import SQLAlchemySessionRepository
from teamtasker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def make_user(db, email="sam@example.com"):
    user = User(name="Sam", email=email, password="x")
    db.add(user)
    db.commit()
    return user


def naive(dt):
    return dt.replace(tzinfo=None) if dt.tzinfo else dt


def test_created_session_resolves_to_user(db):
    user = make_user(db)
    sessions = SQLAlchemySessionRepository(db)
    users = SQLAlchemyUserRepository(db, User)

    token = session_service.create_session(sessions, user)

    assert session_service.resolve_principal(sessions, users, token).id == user.id


def test_resolving_slides_expiry_forward(db):
    user = make_user(db)
    sessions = SQLAlchemySessionRepository(db)
    users = SQLAlchemyUserRepository(db, User)
    now = datetime.now(timezone.utc)
    sessions.create("abc", user.id, now + timedelta(minutes=1))

    session_service.resolve_principal(sessions, users, session_service.sign_session_id("abc"))

    row = db.get(UserSession, "abc")
    db.refresh(row)
    assert naive(row.expire) > naive(now + timedelta(hours=23))


def test_expired_session_is_anonymous(db):
    user = make_user(db)
    sessions = SQLAlchemySessionRepository(db)
    users = SQLAlchemyUserRepository(db, User)
    sessions.create("old", user.id, datetime.now(timezone.utc) - timedelta(seconds=1))

    token = session_service.sign_session_id("old")

    assert session_service.resolve_principal(sessions, users, token) is None


def test_token_signed_with_another_key_is_rejected():
    forged = jwt.encode({"sid": "abc"}, "someone-elses-key", algorithm="HS256")

    assert session_service.read_session_id(forged) is None
    assert session_service.read_session_id(None) is None
    assert session_service.read_session_id("garbage") is None


def test_destroy_session_is_idempotent(db):
    user = make_user(db)
    sessions = SQLAlchemySessionRepository(db)
    token = session_service.create_session(sessions, user)

    session_service.destroy_session(sessions, token)
    session_service.destroy_session(sessions, token)

    assert db.query(UserSession).count() == 0


def test_prune_removes_only_expired_sessions(db):
    user = make_user(db)
    sessions = SQLAlchemySessionRepository(db)
    now = datetime.now(timezone.utc)
    sessions.create("live", user.id, now + timedelta(hours=1))
    sessions.create("dead", user.id, now - timedelta(hours=1))

    assert session_service.prune_expired_sessions(sessions) == 1
    assert [s.sid for s in db.query(UserSession).all()] == ["live"]


def test_prune_job_runs_against_configured_database(monkeypatch, session_factory, db):
    from teamtasker.scheduler import jobs

    user = make_user(db)
    SQLAlchemySessionRepository(db).create("dead", user.id, datetime.now(timezone.utc) - timedelta(hours=1))
    monkeypatch.setattr(jobs, "SessionLocal", session_factory)

    jobs.prune_sessions_job()

    db.expire_all()
    assert db.query(UserSession).count() == 0
