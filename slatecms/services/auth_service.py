# slatecms/services/auth_service.py
# Session authentication: register / login / logout / authenticate
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slatecms.core.errors import (
    AccountInactive, EmailTaken, InvalidCredentials, SessionExpired, Unauthenticated,
)
from slatecms.core.settings import settings
from slatecms.core.timeutil import is_past, utcnow
from slatecms.models.auth import User, UserRole, UserSession, Workspace
from slatecms.services import audit_service
from slatecms.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity projection handed to every downstream check. No password hash."""
    id: int
    name: str
    email: str
    role: UserRole
    workspace_id: Optional[int]

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=UserRole(user.role),
            workspace_id=user.workspace_id,
        )


@dataclass(frozen=True)
class AuthResult:
    token: str
    workspace_id: Optional[int]
    user: AuthenticatedUser


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _new_token() -> str:
    return secrets.token_urlsafe(32)


def _issue_session(db: Session, user_id: int) -> UserSession:
    session = UserSession(
        user_id=user_id,
        token=_new_token(),
        expires_at=utcnow() + timedelta(hours=settings.SESSION_TTL_HOURS),
    )
    db.add(session)
    db.flush()
    return session


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


# -----------------------------
# Authenticate
# -----------------------------
def authenticate(db: Session, token: Optional[str]) -> AuthenticatedUser:
    if not token:
        raise Unauthenticated()

    session = db.scalar(select(UserSession).where(UserSession.token == token))
    if not session:
        raise Unauthenticated("Invalid session token")

    if is_past(session.expires_at):
        raise SessionExpired()

    user = db.get(User, session.user_id)
    if not user:
        raise Unauthenticated("Invalid session token")
    if not user.is_active:
        raise AccountInactive()

    return AuthenticatedUser.from_user(user)


# -----------------------------
# Register / login / logout
# -----------------------------
def register(db: Session, *, name: str, email: str, password: str) -> AuthResult:
    """
    Open registration: the new account becomes admin of a freshly created
    workspace it owns, and gets a session.
    """
    email = normalize_email(email)
    name = (name or "").strip()

    if get_user_by_email(db, email):
        raise EmailTaken()

    try:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.admin,
            is_active=True,
        )
        db.add(user)
        db.flush()

        workspace = Workspace(name=f"{name}'s Workspace", owner_id=user.id)
        db.add(workspace)
        db.flush()

        user.workspace_id = workspace.id
        session = _issue_session(db, user.id)
        db.commit()
    except IntegrityError:
        # concurrent registration with the same email
        db.rollback()
        raise EmailTaken()

    logger.info("registered user id=%s workspace=%s", user.id, workspace.id)
    audit_service.record(
        db,
        actor_id=user.id,
        action="user.register",
        target_type="user",
        target_id=user.id,
        workspace_id=workspace.id,
    )
    return AuthResult(token=session.token, workspace_id=workspace.id, user=AuthenticatedUser.from_user(user))


def login(db: Session, *, email: str, password: str) -> AuthResult:
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    if not user.is_active:
        raise AccountInactive("Account is deactivated")

    # single active session per user
    db.execute(delete(UserSession).where(UserSession.user_id == user.id))
    session = _issue_session(db, user.id)
    user.last_login_at = utcnow()
    db.commit()

    audit_service.record(
        db,
        actor_id=user.id,
        action="user.login",
        target_type="user",
        target_id=user.id,
        workspace_id=user.workspace_id,
    )
    return AuthResult(token=session.token, workspace_id=user.workspace_id, user=AuthenticatedUser.from_user(user))


def logout(db: Session, token: Optional[str]) -> None:
    """Idempotent: unknown or missing tokens are a no-op."""
    if not token:
        return
    session = db.scalar(select(UserSession).where(UserSession.token == token))
    if session:
        db.delete(session)
        db.commit()


def revoke_sessions_for_user(db: Session, user_id: int) -> None:
    db.execute(delete(UserSession).where(UserSession.user_id == user_id))
    db.flush()
