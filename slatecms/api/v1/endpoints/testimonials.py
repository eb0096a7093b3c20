# slatecms/api/v1/endpoints/testimonials.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.collections import TestimonialCreate, TestimonialUpdate, TestimonialOut
from slatecms.services import collection_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.collection_service import TESTIMONIALS

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


@router.get("", response_model=List[TestimonialOut])
def list_testimonials(db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.list_all(db, TESTIMONIALS, user)


@router.post("", response_model=TestimonialOut, status_code=status.HTTP_201_CREATED)
def create_testimonial(payload: TestimonialCreate, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return collection_service.create_item(db, TESTIMONIALS, user, payload)


@router.get("/{testimonial_id}", response_model=Optional[TestimonialOut])
def get_testimonial(testimonial_id: int, db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.get_for_edit(db, TESTIMONIALS, user, testimonial_id)


@router.patch("/{testimonial_id}", response_model=TestimonialOut)
def update_testimonial(
    testimonial_id: int,
    payload: TestimonialUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return collection_service.update_item(db, TESTIMONIALS, user, testimonial_id, payload)


@router.delete("/{testimonial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_testimonial(testimonial_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    collection_service.delete_item(db, TESTIMONIALS, user, testimonial_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
