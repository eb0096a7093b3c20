# slatecms/api/v1/endpoints/pages.py
# Pages and the blocks they contain. Reads are soft ([] / null), writes raise.
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.content import (
    BlockCreate, BlockOrderUpdate, BlockOut, PageCreate, PageForEditOut, PageMetaUpdate, PageOut,
)
from slatecms.services import block_service, page_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", response_model=List[PageOut])
def list_pages(
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return page_service.list_pages(db, user)


@router.post("", response_model=PageOut, status_code=status.HTTP_201_CREATED)
def create_page(
    payload: PageCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return page_service.create_page(
        db, user, title=payload.title, slug=payload.slug, description=payload.description
    )


@router.get("/{page_id}", response_model=Optional[PageForEditOut])
def get_for_edit(
    page_id: int,
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return page_service.get_for_edit(db, user, page_id)


@router.patch("/{page_id}", response_model=PageOut)
def update_meta(
    page_id: int,
    patch: PageMetaUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return page_service.update_meta(db, user, page_id, patch)


@router.post("/{page_id}/publish", response_model=PageOut)
def publish(page_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return page_service.publish_page(db, user, page_id)


@router.post("/{page_id}/unpublish", response_model=PageOut)
def unpublish(page_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return page_service.unpublish_page(db, user, page_id)


@router.post("/{page_id}/archive", response_model=PageOut)
def archive(page_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return page_service.archive_page(db, user, page_id)


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(page_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    page_service.delete_page(db, user, page_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{page_id}/block-order", response_model=PageOut)
def reorder_blocks(
    page_id: int,
    payload: BlockOrderUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return page_service.reorder_blocks(db, user, page_id, payload.block_order)


# -------- Blocks of a page --------
@router.get("/{page_id}/blocks", response_model=List[BlockOut])
def list_blocks(
    page_id: int,
    db: Session = Depends(get_db),
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
):
    return block_service.get_blocks_for_page(db, user, page_id)


@router.post("/{page_id}/blocks", response_model=BlockOut, status_code=status.HTTP_201_CREATED)
def add_block(
    page_id: int,
    payload: BlockCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return block_service.add_block(
        db, user, page_id, content=payload.content, layout=payload.layout, position=payload.position
    )
