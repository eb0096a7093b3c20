# slatecms/services/user_service.py
# Workspace members managed by admins
from __future__ import annotations

from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slatecms.core.errors import CannotDeactivateSelf, EmailTaken
from slatecms.models.auth import User, UserRole
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser, get_user_by_email, normalize_email, revoke_sessions_for_user
from slatecms.services.authz import require_role
from slatecms.services.passwords import hash_password
from slatecms.services.scoping import get_scoped, require_workspace, scoped_select


def create_user(
    db: Session,
    admin: AuthenticatedUser,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole | str = UserRole.editor,
) -> User:
    require_role(admin, UserRole.admin)
    workspace_id = require_workspace(admin)
    email = normalize_email(email)

    if get_user_by_email(db, email):
        raise EmailTaken()

    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=UserRole(role),
        workspace_id=workspace_id,
        is_active=True,
    )
    db.add(user)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise EmailTaken()
    db.commit()

    audit_service.record(
        db, actor_id=admin.id, action="user.create", target_type="user",
        target_id=user.id, workspace_id=workspace_id, details={"role": user.role.value},
    )
    return user


def list_users(db: Session, admin: AuthenticatedUser) -> List[User]:
    require_role(admin, UserRole.admin)
    workspace_id = require_workspace(admin)
    return list(db.scalars(scoped_select(User, workspace_id).order_by(User.created_at, User.id)).all())


def toggle_user_active(db: Session, admin: AuthenticatedUser, user_id: int) -> User:
    """Deactivation also ends every session of the target."""
    require_role(admin, UserRole.admin)
    user = get_scoped(db, User, user_id, admin, label="User")
    if user.id == admin.id:
        raise CannotDeactivateSelf()

    user.is_active = not user.is_active
    if not user.is_active:
        revoke_sessions_for_user(db, user.id)
    db.commit()

    audit_service.record(
        db, actor_id=admin.id, action="user.toggle_active", target_type="user",
        target_id=user.id, workspace_id=user.workspace_id, details={"is_active": user.is_active},
    )
    return user
