# slatecms/api/v1/endpoints/faqs.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.collections import FaqCreate, FaqUpdate, FaqOut
from slatecms.services import collection_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.collection_service import FAQS

router = APIRouter(prefix="/faqs", tags=["faqs"])


@router.get("", response_model=List[FaqOut])
def list_faqs(db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.list_all(db, FAQS, user)


@router.post("", response_model=FaqOut, status_code=status.HTTP_201_CREATED)
def create_faq(payload: FaqCreate, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return collection_service.create_item(db, FAQS, user, payload)


@router.get("/{faq_id}", response_model=Optional[FaqOut])
def get_faq(faq_id: int, db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.get_for_edit(db, FAQS, user, faq_id)


@router.patch("/{faq_id}", response_model=FaqOut)
def update_faq(
    faq_id: int,
    payload: FaqUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return collection_service.update_item(db, FAQS, user, faq_id, payload)


@router.delete("/{faq_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_faq(faq_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    collection_service.delete_item(db, FAQS, user, faq_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
