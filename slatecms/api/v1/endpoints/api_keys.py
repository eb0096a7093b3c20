# slatecms/api/v1/endpoints/api_keys.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user
from slatecms.schemas.admin import ApiKeyCreate, ApiKeyCreatedOut, ApiKeyOut
from slatecms.services import api_key_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/api-keys", tags=["api-keys"])


@router.post("", response_model=ApiKeyCreatedOut, status_code=status.HTTP_201_CREATED)
def create_api_key(
    payload: ApiKeyCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    created = api_key_service.create_api_key(
        db, user,
        name=payload.name,
        permissions=payload.permissions,
        allowed_origins=payload.allowed_origins,
        expires_in_days=payload.expires_in_days,
    )
    k = created.api_key
    return ApiKeyCreatedOut(
        id=k.id,
        key=k.key,
        secret=created.secret,
        name=k.name,
        permissions=k.permissions,
        allowed_origins=k.allowed_origins,
        expires_at=k.expires_at,
    )


@router.get("", response_model=List[ApiKeyOut])
def list_api_keys(db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return api_key_service.list_api_keys(db, user)


@router.post("/{key_id}/revoke", response_model=ApiKeyOut)
def revoke(key_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return api_key_service.revoke_api_key(db, user, key_id)


@router.post("/{key_id}/reactivate", response_model=ApiKeyOut)
def reactivate(key_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return api_key_service.reactivate_api_key(db, user, key_id)


@router.delete("/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(key_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    api_key_service.delete_api_key(db, user, key_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
