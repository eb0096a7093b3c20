# slatecms/services/scoping.py
# Workspace scoping: every content read/write is confined to the caller's workspace.
from __future__ import annotations

from typing import Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from slatecms.core.errors import NotFound
from slatecms.services.auth_service import AuthenticatedUser

T = TypeVar("T")


def require_workspace(user: AuthenticatedUser) -> int:
    if user.workspace_id is None:
        raise NotFound("Workspace not found")
    return user.workspace_id


def get_scoped(
    db: Session,
    model: Type[T],
    obj_id: int,
    user: AuthenticatedUser,
    *,
    label: Optional[str] = None,
) -> T:
    """
    Load `model` by id and check it belongs to the caller's workspace.
    Rows of other workspaces are reported as NotFound, never Forbidden.
    """
    label = label or model.__name__
    obj = db.get(model, obj_id)
    if obj is None or getattr(obj, "workspace_id", None) != user.workspace_id:
        raise NotFound(f"{label} not found")
    return obj


def find_scoped(db: Session, model: Type[T], obj_id: int, workspace_id: int) -> Optional[T]:
    obj = db.get(model, obj_id)
    if obj is None or getattr(obj, "workspace_id", None) != workspace_id:
        return None
    return obj


def scoped_select(model: Type[T], workspace_id: int) -> Select:
    return select(model).where(model.workspace_id == workspace_id)
