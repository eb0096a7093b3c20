# slatecms/api/delivery/router.py
# Public read surface. Anonymous reads are addressed by workspace id; external
# reads resolve the workspace from the API key. Both hydrate pages the same way.
from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from slatecms.core.errors import NotFound
from slatecms.db.session import get_db
from slatecms.deps.auth import require_api_key
from slatecms.models.auth import ApiKey
from slatecms.schemas.collections import FaqOut, ProjectOut, ServiceOfferingOut, TestimonialOut
from slatecms.schemas.content import SiteSettingsOut
from slatecms.schemas.delivery import GlobalDefaultsOut, PublishedPageOut, PublishedPageSummaryOut
from slatecms.services import api_key_service, collection_service, delivery_service, site_settings_service
from slatecms.services.collection_service import FAQS, PROJECTS, SERVICES, TESTIMONIALS

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])

PAGES_READ = "pages:read"


# -----------------------------
# Anonymous
# -----------------------------
@router.get("/workspaces/{workspace_id}/pages", response_model=List[PublishedPageSummaryOut])
def list_published(workspace_id: int, db: Session = Depends(get_db)):
    return delivery_service.list_published(db, workspace_id=workspace_id)


@router.get("/workspaces/{workspace_id}/pages/{slug}", response_model=PublishedPageOut)
def get_page_by_slug(workspace_id: int, slug: str, db: Session = Depends(get_db)):
    page = delivery_service.get_published_page(db, workspace_id=workspace_id, slug=slug)
    if page is None:
        raise NotFound("Page not found")
    return page


@router.get("/workspaces/{workspace_id}/global-sections/defaults", response_model=GlobalDefaultsOut)
def get_defaults(workspace_id: int, db: Session = Depends(get_db)):
    return delivery_service.get_defaults(db, workspace_id=workspace_id)


# -----------------------------
# External (API key)
# -----------------------------
@router.get("/external/pages", response_model=List[PublishedPageSummaryOut])
def list_published_external(
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    items = delivery_service.list_published(db, workspace_id=api_key.workspace_id)
    api_key_service.record_usage(db, api_key)
    return items


@router.get("/external/pages/{slug}", response_model=PublishedPageOut)
def get_page_by_slug_external(
    slug: str,
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    page = delivery_service.get_published_page(db, workspace_id=api_key.workspace_id, slug=slug)
    if page is None:
        raise NotFound("Page not found")
    api_key_service.record_usage(db, api_key)
    return page


@router.get("/external/settings", response_model=Dict[str, SiteSettingsOut])
def get_settings_external(
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    rows = site_settings_service.all_settings(db, api_key.workspace_id)
    out = {k: SiteSettingsOut.model_validate(v) for k, v in rows.items()}
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/settings/{key}", response_model=SiteSettingsOut)
def get_setting_external(
    key: str,
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    row = site_settings_service.find_settings(db, api_key.workspace_id, key)
    if row is None:
        raise NotFound("Settings not found")
    out = SiteSettingsOut.model_validate(row)
    api_key_service.record_usage(db, api_key)
    return out


# -----------------------------
# External collections (API key)
# -----------------------------
@router.get("/external/faqs", response_model=List[FaqOut])
def list_faqs_external(
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    items = collection_service.list_published(db, FAQS, api_key.workspace_id, category=category)
    out = [FaqOut.model_validate(i) for i in items]
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/testimonials", response_model=List[TestimonialOut])
def list_testimonials_external(
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    items = collection_service.list_published(db, TESTIMONIALS, api_key.workspace_id)
    out = [TestimonialOut.model_validate(i) for i in items]
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/services", response_model=List[ServiceOfferingOut])
def list_services_external(
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    items = collection_service.list_published(db, SERVICES, api_key.workspace_id)
    out = [ServiceOfferingOut.model_validate(i) for i in items]
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/services/{slug}", response_model=ServiceOfferingOut)
def get_service_external(
    slug: str,
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    item = collection_service.get_published_by_slug(db, SERVICES, api_key.workspace_id, slug)
    if item is None:
        raise NotFound("Service not found")
    out = ServiceOfferingOut.model_validate(item)
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/projects", response_model=List[ProjectOut])
def list_projects_external(
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    items = collection_service.list_published(db, PROJECTS, api_key.workspace_id, category=category)
    out = [ProjectOut.model_validate(i) for i in items]
    api_key_service.record_usage(db, api_key)
    return out


@router.get("/external/projects/{slug}", response_model=ProjectOut)
def get_project_external(
    slug: str,
    db: Session = Depends(get_db),
    api_key: ApiKey = Depends(require_api_key(PAGES_READ)),
):
    item = collection_service.get_published_by_slug(db, PROJECTS, api_key.workspace_id, slug)
    if item is None:
        raise NotFound("Project not found")
    out = ProjectOut.model_validate(item)
    api_key_service.record_usage(db, api_key)
    return out
