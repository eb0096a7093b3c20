# slatecms/api/v1/endpoints/global_sections.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.content import BlockContentUpdate, GlobalSectionCreate, GlobalSectionOut
from slatecms.services import global_section_service as gs
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/global-sections", tags=["global-sections"])


@router.get("", response_model=List[GlobalSectionOut])
def list_sections(
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return gs.list_global_sections(db, user)


@router.post("", response_model=GlobalSectionOut, status_code=status.HTTP_201_CREATED)
def create_section(
    payload: GlobalSectionCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return gs.create_global_section(
        db, user,
        name=payload.name,
        slug=payload.slug,
        type=payload.type,
        content=payload.content,
        is_default=payload.is_default,
    )


@router.get("/by-slug/{slug}", response_model=Optional[GlobalSectionOut])
def get_by_slug(
    slug: str,
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return gs.get_global_section_by_slug(db, user, slug)


@router.patch("/{section_id}/content", response_model=GlobalSectionOut)
def update_content(
    section_id: int,
    payload: BlockContentUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return gs.update_global_section_content(db, user, section_id, payload.content)


@router.post("/{section_id}/set-default", response_model=GlobalSectionOut)
def set_default(section_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return gs.set_default(db, user, section_id)


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(section_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    gs.delete_global_section(db, user, section_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
