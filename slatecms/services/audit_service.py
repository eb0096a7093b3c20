# slatecms/services/audit_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from slatecms.core.settings import settings
from slatecms.models.audit import AuditLogEntry
from slatecms.models.auth import User, UserRole
from slatecms.schemas.admin import AuditLogOut

logger = logging.getLogger(__name__)


def compute_changed_keys(before: Dict[str, Any] | None, after: Dict[str, Any] | None) -> List[str]:
    """
    Keys whose value differs between before and after (shallow comparison).
    None is treated as {}.
    """
    b = before or {}
    a = after or {}
    keys = set(b.keys()) | set(a.keys())
    changed = [k for k in keys if b.get(k) != a.get(k)]
    changed.sort()
    return changed


def record(
    db: Session,
    *,
    actor_id: int,
    action: str,
    target_type: str,
    target_id: int | str,
    details: Optional[Dict[str, Any]] = None,
    workspace_id: Optional[int] = None,
) -> Optional[AuditLogEntry]:
    """
    Append an audit row. Must be called after the primary mutation committed:
    this commits its own row and never raises, so a failed audit leaves the
    primary effect in place. Failures are logged and None is returned.
    """
    entry = AuditLogEntry(
        workspace_id=workspace_id,
        user_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=str(target_id),
        details=details,
    )
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "audit write failed action=%s target=%s:%s actor=%s",
            action, target_type, target_id, actor_id,
        )
        return None
    return entry


def get_recent(db: Session, user, *, limit: Optional[int] = None) -> List[AuditLogOut]:
    """
    Most recent entries of the caller's workspace, newest first, with the acting
    user's name/email. Admin-only; anonymous or non-admin callers get [].
    """
    if user is None or user.role != UserRole.admin or user.workspace_id is None:
        return []

    n = limit or settings.AUDIT_RECENT_DEFAULT_LIMIT
    n = max(1, min(int(n), settings.AUDIT_RECENT_MAX_LIMIT))

    rows = db.execute(
        select(AuditLogEntry, User)
        .join(User, User.id == AuditLogEntry.user_id, isouter=True)
        .where(AuditLogEntry.workspace_id == user.workspace_id)
        .order_by(AuditLogEntry.timestamp.desc(), AuditLogEntry.id.desc())
        .limit(n)
    ).all()

    out: List[AuditLogOut] = []
    for log, actor in rows:
        out.append(
            AuditLogOut(
                id=log.id,
                workspace_id=log.workspace_id,
                user_id=log.user_id,
                user_name=actor.name if actor else "Unknown",
                user_email=actor.email if actor else "",
                action=log.action,
                target_type=log.target_type,
                target_id=log.target_id,
                details=log.details,
                timestamp=log.timestamp,
            )
        )
    return out
