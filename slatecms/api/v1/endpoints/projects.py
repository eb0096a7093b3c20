# slatecms/api/v1/endpoints/projects.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from slatecms.db.session import get_db
from slatecms.deps.auth import get_current_user, get_optional_user
from slatecms.schemas.collections import ProjectCreate, ProjectUpdate, ProjectOut
from slatecms.services import collection_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.collection_service import PROJECTS

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectOut])
def list_projects(db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.list_all(db, PROJECTS, user)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(payload: ProjectCreate, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    return collection_service.create_item(db, PROJECTS, user, payload)


@router.get("/{project_id}", response_model=Optional[ProjectOut])
def get_project(project_id: int, db: Session = Depends(get_db), user: Optional[AuthenticatedUser] = Depends(get_optional_user)):
    return collection_service.get_for_edit(db, PROJECTS, user, project_id)


@router.patch("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
):
    return collection_service.update_item(db, PROJECTS, user, project_id, payload)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, db: Session = Depends(get_db), user: AuthenticatedUser = Depends(get_current_user)):
    collection_service.delete_item(db, PROJECTS, user, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
