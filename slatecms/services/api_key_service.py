# slatecms/services/api_key_service.py
# Scoped read-only credentials for external consumers (key + secret pair)
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from slatecms.core.errors import (
    InsufficientPermission, InvalidKey, InvalidSecret, KeyExpired, KeyRevoked,
)
from slatecms.core.settings import settings
from slatecms.core.timeutil import is_past, utcnow
from slatecms.models.auth import ApiKey, UserRole
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import require_role
from slatecms.services.passwords import hash_secret, verify_secret
from slatecms.services.scoping import get_scoped, require_workspace, scoped_select

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedApiKey:
    """The only place the plaintext secret ever appears."""
    api_key: ApiKey
    secret: str


def generate_key() -> str:
    return f"{settings.API_KEY_PREFIX}{secrets.token_urlsafe(24)}"


def generate_secret() -> str:
    return secrets.token_urlsafe(32)


# -----------------------------
# Validation
# -----------------------------
def validate(db: Session, key: Optional[str], secret: Optional[str], required_permission: str) -> ApiKey:
    """
    Checks run in a fixed order so each failure has a stable meaning:
    unknown key, revoked, expired, wrong secret, missing permission.
    Read-only: usage is recorded separately by the caller.
    """
    api_key = db.scalar(select(ApiKey).where(ApiKey.key == key)) if key else None
    if api_key is None:
        raise InvalidKey()
    if not api_key.is_active:
        raise KeyRevoked()
    if is_past(api_key.expires_at):
        raise KeyExpired()
    if not secret or not verify_secret(secret, api_key.secret_hash):
        raise InvalidSecret()
    if required_permission not in (api_key.permissions or []):
        raise InsufficientPermission(f'API key lacks permission "{required_permission}"')
    return api_key


def origin_allowed(api_key: ApiKey, origin: Optional[str]) -> bool:
    """Keys without an origin list, and requests without an Origin header, pass."""
    if not api_key.allowed_origins or not origin:
        return True
    return origin.rstrip("/") in {o.rstrip("/") for o in api_key.allowed_origins}


def record_usage(db: Session, api_key: ApiKey) -> None:
    api_key.last_used_at = utcnow()
    db.commit()


# -----------------------------
# Management (admin)
# -----------------------------
def create_api_key(
    db: Session,
    user: AuthenticatedUser,
    *,
    name: str,
    permissions: Optional[List[str]] = None,
    allowed_origins: Optional[List[str]] = None,
    expires_in_days: Optional[int] = None,
) -> CreatedApiKey:
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)

    secret = generate_secret()
    api_key = ApiKey(
        workspace_id=workspace_id,
        name=name,
        key=generate_key(),
        secret_hash=hash_secret(secret),
        permissions=list(permissions) if permissions else list(settings.API_KEY_DEFAULT_PERMISSIONS),
        allowed_origins=list(allowed_origins) if allowed_origins else None,
        is_active=True,
        expires_at=utcnow() + timedelta(days=expires_in_days) if expires_in_days else None,
        created_by=user.id,
    )
    db.add(api_key)
    db.flush()
    db.commit()

    logger.info("api key created id=%s workspace=%s", api_key.id, workspace_id)
    audit_service.record(
        db, actor_id=user.id, action="apiKey.create", target_type="apiKey",
        target_id=api_key.id, workspace_id=workspace_id,
        details={"name": name, "permissions": api_key.permissions},
    )
    return CreatedApiKey(api_key=api_key, secret=secret)


def list_api_keys(db: Session, user: AuthenticatedUser) -> List[ApiKey]:
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)
    stmt = scoped_select(ApiKey, workspace_id).order_by(ApiKey.created_at.desc(), ApiKey.id.desc())
    return list(db.scalars(stmt).all())


def _set_active(db: Session, user: AuthenticatedUser, key_id: int, active: bool, action: str) -> ApiKey:
    require_role(user, UserRole.admin)
    api_key = get_scoped(db, ApiKey, key_id, user, label="API key")
    api_key.is_active = active
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=action, target_type="apiKey",
        target_id=api_key.id, workspace_id=api_key.workspace_id,
    )
    return api_key


def revoke_api_key(db: Session, user: AuthenticatedUser, key_id: int) -> ApiKey:
    return _set_active(db, user, key_id, False, "apiKey.revoke")


def reactivate_api_key(db: Session, user: AuthenticatedUser, key_id: int) -> ApiKey:
    return _set_active(db, user, key_id, True, "apiKey.reactivate")


def delete_api_key(db: Session, user: AuthenticatedUser, key_id: int) -> None:
    require_role(user, UserRole.admin)
    api_key = get_scoped(db, ApiKey, key_id, user, label="API key")
    workspace_id = api_key.workspace_id
    db.delete(api_key)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="apiKey.delete", target_type="apiKey",
        target_id=key_id, workspace_id=workspace_id,
    )
