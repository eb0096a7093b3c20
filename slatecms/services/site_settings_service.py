# slatecms/services/site_settings_service.py
# Keyed per-workspace site metadata ("general" unless stated otherwise)
from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from slatecms.models.auth import UserRole
from slatecms.models.content import SiteSetting
from slatecms.schemas.content import SiteSettingsUpsert
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import has_role, require_role
from slatecms.services.scoping import require_workspace

DEFAULT_KEY = "general"


def find_settings(db: Session, workspace_id: int, key: str = DEFAULT_KEY) -> Optional[SiteSetting]:
    return db.scalar(
        select(SiteSetting).where(and_(SiteSetting.workspace_id == workspace_id, SiteSetting.key == key))
    )


def all_settings(db: Session, workspace_id: int) -> Dict[str, SiteSetting]:
    rows = db.scalars(
        select(SiteSetting).where(SiteSetting.workspace_id == workspace_id).order_by(SiteSetting.key)
    ).all()
    return {row.key: row for row in rows}


def upsert_site_settings(
    db: Session, user: AuthenticatedUser, key: str, fields: SiteSettingsUpsert
) -> SiteSetting:
    """Insert, or patch only the fields present in the payload."""
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)
    values = fields.model_dump(exclude_unset=True)

    row = find_settings(db, workspace_id, key)
    if row is None:
        row = SiteSetting(workspace_id=workspace_id, key=key, updated_by=user.id, **values)
        db.add(row)
        action = "settings.create"
    else:
        for name, value in values.items():
            setattr(row, name, value)
        row.updated_by = user.id
        action = "settings.update"
    db.flush()
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=action, target_type="settings",
        target_id=row.id, workspace_id=workspace_id, details={"key": key, "fields": sorted(values)},
    )
    return row


def get_site_settings(
    db: Session, user: Optional[AuthenticatedUser], key: str = DEFAULT_KEY
) -> Optional[SiteSetting]:
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return None
    return find_settings(db, user.workspace_id, key)


def get_all_site_settings(db: Session, user: Optional[AuthenticatedUser]) -> Dict[str, SiteSetting]:
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return {}
    return all_settings(db, user.workspace_id)
