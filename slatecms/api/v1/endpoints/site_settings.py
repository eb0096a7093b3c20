# slatecms/api/v1/endpoints/site_settings.py
from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.content import SiteSettingsOut, SiteSettingsUpsert
from slatecms.services import site_settings_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/site-settings", tags=["site-settings"])


@router.get("", response_model=Dict[str, SiteSettingsOut])
def get_all(db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return site_settings_service.get_all_site_settings(db, user)


@router.get("/{key}", response_model=Optional[SiteSettingsOut])
def get_one(key: str, db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return site_settings_service.get_site_settings(db, user, key)


@router.put("/{key}", response_model=SiteSettingsOut)
def upsert(
    key: str,
    payload: SiteSettingsUpsert,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return site_settings_service.upsert_site_settings(db, user, key, payload)
