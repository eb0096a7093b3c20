# slatecms/api/v1/endpoints/service_offerings.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.collections import ServiceOfferingCreate, ServiceOfferingUpdate, ServiceOfferingOut
from slatecms.services import collection_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.collection_service import SERVICES

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=List[ServiceOfferingOut])
def list_services(db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.list_all(db, SERVICES, user)


@router.post("", response_model=ServiceOfferingOut, status_code=status.HTTP_201_CREATED)
def create_service(payload: ServiceOfferingCreate, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return collection_service.create_item(db, SERVICES, user, payload)


@router.get("/{service_id}", response_model=Optional[ServiceOfferingOut])
def get_service(service_id: int, db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.get_for_edit(db, SERVICES, user, service_id)


@router.patch("/{service_id}", response_model=ServiceOfferingOut)
def update_service(
    service_id: int,
    payload: ServiceOfferingUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return collection_service.update_item(db, SERVICES, user, service_id, payload)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    collection_service.delete_item(db, SERVICES, user, service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
