# slatecms/services/authz.py
# Role gate: fixed two-level hierarchy, admin implies editor
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from slatecms.core.errors import InsufficientRole
from slatecms.models.auth import UserRole
from slatecms.services.auth_service import AuthenticatedUser, authenticate

_RANK = {
    UserRole.editor: 1,
    UserRole.admin: 2,
}

_MESSAGES = {
    UserRole.editor: "Editor access required for this operation",
    UserRole.admin: "Admin access required for this operation",
}


def has_role(user: Optional[AuthenticatedUser], minimum: UserRole | str) -> bool:
    if user is None:
        return False
    return _RANK.get(UserRole(user.role), 0) >= _RANK[UserRole(minimum)]


def require_role(user: AuthenticatedUser, minimum: UserRole | str) -> AuthenticatedUser:
    """Pure predicate; raises InsufficientRole."""
    minimum = UserRole(minimum)
    if not has_role(user, minimum):
        raise InsufficientRole(_MESSAGES[minimum])
    return user


def is_admin(user: Optional[AuthenticatedUser]) -> bool:
    return has_role(user, UserRole.admin)


def require_admin(db: Session, token: Optional[str]) -> AuthenticatedUser:
    """Structure-level operations: pages, layout, order, locks, users, keys."""
    return require_role(authenticate(db, token), UserRole.admin)


def require_editor(db: Session, token: Optional[str]) -> AuthenticatedUser:
    """Content-level operations: text, images, links inside existing blocks."""
    return require_role(authenticate(db, token), UserRole.editor)
