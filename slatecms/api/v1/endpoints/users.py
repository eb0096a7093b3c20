# slatecms/api/v1/endpoints/users.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user
from slatecms.schemas.admin import UserCreate, UserOut
from slatecms.services import user_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return user_service.list_users(db, current_user)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return user_service.create_user(
        db, current_user,
        name=payload.name, email=payload.email, password=payload.password, role=payload.role,
    )


@router.post("/{user_id}/toggle-active", response_model=UserOut)
def toggle_active(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return user_service.toggle_user_active(db, current_user, user_id)
