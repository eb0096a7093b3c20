# slatecms/schemas/auth.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

Role = Literal["admin", "editor"]


class RegisterIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class LogoutIn(BaseModel):
    # falls back to the bearer header when omitted
    token: Optional[str] = None


class AuthUserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    workspace_id: Optional[int] = None


class AuthOut(BaseModel):
    token: str
    workspace_id: Optional[int] = None
    user: AuthUserOut
