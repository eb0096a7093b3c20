# slatecms/schemas/admin.py
# Pydantic: users, API keys and audit log for the admin surface
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from slatecms.schemas.auth import Role


# ---------- Users ----------
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Role = "editor"


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    is_active: bool
    last_login_at: Optional[datetime] = None

    @field_validator("role", mode="before")
    @classmethod
    def _role_value(cls, v):
        return getattr(v, "value", v)


# ---------- API keys ----------
class ApiKeyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    permissions: Optional[List[str]] = None
    allowed_origins: Optional[List[str]] = None
    expires_in_days: Optional[int] = Field(None, ge=1)


class ApiKeyOut(BaseModel):
    """Never carries the secret or its hash."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    key: str
    permissions: List[str]
    allowed_origins: Optional[List[str]] = None
    is_active: bool
    last_used_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime


class ApiKeyCreatedOut(BaseModel):
    id: int
    key: str
    # shown exactly once
    secret: str
    name: str
    permissions: List[str]
    allowed_origins: Optional[List[str]] = None
    expires_at: Optional[datetime] = None


# ---------- Audit ----------
class AuditLogOut(BaseModel):
    id: int
    workspace_id: Optional[int] = None
    user_id: int
    user_name: str
    user_email: str
    action: str
    target_type: str
    target_id: str
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime
