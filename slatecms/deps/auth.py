# slatecms/deps/auth.py
from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from slatecms.core.errors import CMSError, OriginNotAllowed
from slatecms.db.session import get_db
from slatecms.models.auth import ApiKey
from slatecms.services import api_key_service
from slatecms.services.auth_service import AuthenticatedUser, authenticate

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)


# -----------------------------
# Session credential
# -----------------------------
def get_token(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[str]:
    if not creds or not creds.credentials:
        return None
    return creds.credentials


def get_current_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_token),
) -> AuthenticatedUser:
    return authenticate(db, token)


def get_optional_user(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(get_token),
) -> Optional[AuthenticatedUser]:
    """Soft variant for UI reads: a missing or bad token means anonymous."""
    if not token:
        return None
    try:
        return authenticate(db, token)
    except CMSError:
        return None


# -----------------------------
# Scoped credential (API key)
# -----------------------------
def require_api_key(permission: str) -> Callable:
    """
    Usage:
        api_key: ApiKey = Depends(require_api_key("pages:read"))
    Validates the X-Api-Key / X-Api-Secret pair, then the request Origin
    against the key's allowed origins.
    """
    def _dep(
        request: Request,
        db: Session = Depends(get_db),
        x_api_key: Optional[str] = Header(None, alias="X-Api-Key"),
        x_api_secret: Optional[str] = Header(None, alias="X-Api-Secret"),
    ) -> ApiKey:
        api_key = api_key_service.validate(db, x_api_key, x_api_secret, permission)
        if not api_key_service.origin_allowed(api_key, request.headers.get("origin")):
            raise OriginNotAllowed()
        return api_key

    return _dep
