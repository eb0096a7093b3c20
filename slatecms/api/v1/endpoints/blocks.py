# slatecms/api/v1/endpoints/blocks.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user
from slatecms.schemas.content import BlockContentUpdate, BlockLayoutUpdate, BlockOut
from slatecms.services import block_service
from slatecms.services.auth_service import AuthenticatedUser

router = APIRouter(prefix="/blocks", tags=["blocks"])


@router.patch("/{block_id}/content", response_model=BlockOut)
def update_content(
    block_id: int,
    payload: BlockContentUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return block_service.update_content(db, user, block_id, payload.content)


@router.patch("/{block_id}/layout", response_model=BlockOut)
def update_layout(
    block_id: int,
    payload: BlockLayoutUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return block_service.update_layout(db, user, block_id, payload.layout)


@router.post("/{block_id}/toggle-lock", response_model=BlockOut)
def toggle_lock(block_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return block_service.toggle_lock(db, user, block_id)


@router.post("/{block_id}/duplicate", response_model=BlockOut, status_code=status.HTTP_201_CREATED)
def duplicate(block_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return block_service.duplicate_block(db, user, block_id)


@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_block(block_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    block_service.delete_block(db, user, block_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
