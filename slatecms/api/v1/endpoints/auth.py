# slatecms/api/v1/endpoints/auth.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_optional_user, get_token
from slatecms.schemas.auth import AuthOut, AuthUserOut, LoginIn, LogoutIn, RegisterIn
from slatecms.services import auth_service
from slatecms.services.auth_service import AuthenticatedUser, AuthResult

router = APIRouter(tags=["auth"])  # prefix set in api/v1/router.py


def _user_out(user: AuthenticatedUser) -> AuthUserOut:
    return AuthUserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        workspace_id=user.workspace_id,
    )


def _auth_out(result: AuthResult) -> AuthOut:
    return AuthOut(token=result.token, workspace_id=result.workspace_id, user=_user_out(result.user))


@router.post("/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    result = auth_service.register(db, name=payload.name, email=payload.email, password=payload.password)
    return _auth_out(result)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    result = auth_service.login(db, email=payload.email, password=payload.password)
    return _auth_out(result)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    payload: Optional[LogoutIn] = Body(None),
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_token),
):
    auth_service.logout(db, (payload.token if payload and payload.token else None) or token)


@router.get("/me", response_model=Optional[AuthUserOut])
def me(user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    """null when anonymous, expired or deactivated."""
    return _user_out(user) if user else None
