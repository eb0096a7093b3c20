# slatecms/api/v1/endpoints/audit.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slatecms.core.settings import settings
from slatecms.db.session import get_db
from slatecms.deps.auth import get_optional_user
from slatecms.schemas.admin import AuditLogOut
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/audit-log", tags=["audit"])


@router.get("", response_model=List[AuditLogOut])
def recent(
    limit: Optional[int] = Query(None, ge=1, le=settings.AUDIT_RECENT_MAX_LIMIT),
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return audit_service.get_recent(db, user, limit=limit)
