# slatecms/services/page_service.py
# Pages: creation with slug rules, metadata patching, lifecycle, cascade delete, block order
from __future__ import annotations

import re
from typing import List, Optional

from sqlalchemy import and_, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slatecms.core.errors import (
    InsufficientRole, InvalidSlugFormat, NotFound, SlugTaken, ValidationError,
)
from slatecms.models.auth import UserRole
from slatecms.models.content import Block, GlobalSection, Page
from slatecms.schemas.content import BlockOut, PageForEditOut, PageMetaUpdate, PageOut
from slatecms.services import audit_service, publish_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import has_role, is_admin, require_role
from slatecms.services.scoping import get_scoped, require_workspace, scoped_select

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


# -----------------------------
# Slugs
# -----------------------------
def slugify(value: str) -> str:
    """'About Us!' -> 'about-us'"""
    return _NON_ALNUM.sub("-", (value or "").strip().lower()).strip("-")


def validate_slug(slug: str) -> str:
    if not slug or not SLUG_RE.match(slug):
        raise InvalidSlugFormat()
    return slug


def _slug_in_use(db: Session, workspace_id: int, slug: str, *, exclude_id: Optional[int] = None) -> bool:
    stmt = select(Page.id).where(and_(Page.workspace_id == workspace_id, Page.slug == slug))
    if exclude_id is not None:
        stmt = stmt.where(Page.id != exclude_id)
    return db.scalar(stmt.limit(1)) is not None


def _flush_or_slug_taken(db: Session, slug: str) -> None:
    """The unique constraint is the source of truth when two writers race."""
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise SlugTaken(f'A page with slug "{slug}" already exists')


# -----------------------------
# Lookups
# -----------------------------
def get_page(db: Session, user: AuthenticatedUser, page_id: int) -> Page:
    return get_scoped(db, Page, page_id, user, label="Page")


def page_blocks_in_order(db: Session, page: Page) -> List[Block]:
    rows = db.scalars(select(Block).where(Block.page_id == page.id)).all()
    by_id = {b.id: b for b in rows}
    return [by_id[bid] for bid in (page.block_order or []) if bid in by_id]


def list_pages(db: Session, user: Optional[AuthenticatedUser]) -> List[Page]:
    """Editor read; anonymous or under-privileged callers get []."""
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return []
    stmt = scoped_select(Page, user.workspace_id).order_by(Page.created_at.desc(), Page.id.desc())
    return list(db.scalars(stmt).all())


def get_for_edit(db: Session, user: Optional[AuthenticatedUser], page_id: int) -> Optional[PageForEditOut]:
    """Editor read with blocks hydrated in page order; None when not visible."""
    if not has_role(user, UserRole.editor):
        return None
    try:
        page = get_page(db, user, page_id)
    except NotFound:
        return None
    return PageForEditOut(
        **PageOut.model_validate(page).model_dump(),
        blocks=[BlockOut.model_validate(b) for b in page_blocks_in_order(db, page)],
    )


# -----------------------------
# Create / update
# -----------------------------
def create_page(
    db: Session,
    user: AuthenticatedUser,
    *,
    title: str,
    slug: Optional[str] = None,
    description: Optional[str] = None,
) -> Page:
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)

    slug = validate_slug(slug if slug else slugify(title))
    if _slug_in_use(db, workspace_id, slug):
        raise SlugTaken(f'A page with slug "{slug}" already exists')

    page = Page(
        workspace_id=workspace_id,
        title=title,
        slug=slug,
        description=description,
        status="draft",
        seo={"title": title, "description": description or ""},
        block_order=[],
        created_by=user.id,
    )
    db.add(page)
    _flush_or_slug_taken(db, slug)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="page.create", target_type="page",
        target_id=page.id, workspace_id=workspace_id, details={"slug": slug},
    )
    return page


def _resolve_override(db: Session, workspace_id: int, section_id: Optional[int], expected_type: str) -> Optional[int]:
    if section_id is None:
        return None
    section = db.get(GlobalSection, section_id)
    if section is None or section.workspace_id != workspace_id:
        raise NotFound("Global section not found")
    if section.type != expected_type:
        raise ValidationError(f"Global section {section_id} is not a {expected_type} section")
    return section.id


def update_meta(db: Session, user: AuthenticatedUser, page_id: int, patch: PageMetaUpdate) -> Page:
    """
    Editors may change title, description and SEO text. Slug and header/footer
    overrides are structural and need admin. Only fields present in the patch
    are touched; SEO is merged field by field.
    """
    require_role(user, UserRole.editor)
    page = get_page(db, user, page_id)
    fields = patch.model_fields_set
    before = {"title": page.title, "slug": page.slug, "description": page.description, "seo": dict(page.seo or {})}

    # validate everything before touching the row
    new_slug = None
    if "slug" in fields and patch.slug is not None and patch.slug != page.slug:
        if not is_admin(user):
            raise InsufficientRole("Only admins can change page slugs")
        new_slug = validate_slug(patch.slug)
        if _slug_in_use(db, page.workspace_id, new_slug, exclude_id=page.id):
            raise SlugTaken(f'Slug "{new_slug}" is already taken')

    overrides = {}
    for name, expected in (("header_override_id", "header"), ("footer_override_id", "footer")):
        if name in fields and getattr(patch, name) != getattr(page, name):
            if not is_admin(user):
                raise InsufficientRole("Only admins can change header/footer overrides")
            overrides[name] = _resolve_override(db, page.workspace_id, getattr(patch, name), expected)

    if new_slug is not None:
        page.slug = new_slug
    for name, value in overrides.items():
        setattr(page, name, value)
    if "title" in fields and patch.title is not None:
        page.title = patch.title
    if "description" in fields:
        page.description = patch.description
    if "seo" in fields and patch.seo is not None:
        merged = dict(page.seo or {})
        merged.update(patch.seo.model_dump(exclude_unset=True))
        page.seo = merged

    page.updated_by = user.id
    _flush_or_slug_taken(db, page.slug)
    db.commit()

    after = {"title": page.title, "slug": page.slug, "description": page.description, "seo": dict(page.seo or {})}
    audit_service.record(
        db, actor_id=user.id, action="page.update_meta", target_type="page",
        target_id=page.id, workspace_id=page.workspace_id,
        details={"changed_keys": audit_service.compute_changed_keys(before, after)},
    )
    return page


# -----------------------------
# Lifecycle
# -----------------------------
def _transition(db: Session, user: AuthenticatedUser, page_id: int, transition: str) -> Page:
    require_role(user, UserRole.admin)
    page = get_page(db, user, page_id)
    before_status = page.status
    publish_service.apply_transition(db, page, transition, actor_id=user.id)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=f"page.{transition}", target_type="page",
        target_id=page.id, workspace_id=page.workspace_id,
        details={"before_status": before_status, "after_status": page.status},
    )
    return page


def publish_page(db: Session, user: AuthenticatedUser, page_id: int) -> Page:
    return _transition(db, user, page_id, "publish")


def unpublish_page(db: Session, user: AuthenticatedUser, page_id: int) -> Page:
    return _transition(db, user, page_id, "unpublish")


def archive_page(db: Session, user: AuthenticatedUser, page_id: int) -> Page:
    return _transition(db, user, page_id, "archive")


# -----------------------------
# Delete / reorder
# -----------------------------
def delete_page(db: Session, user: AuthenticatedUser, page_id: int) -> None:
    """Children first: every block of the page is removed before the page row."""
    require_role(user, UserRole.admin)
    page = get_page(db, user, page_id)
    workspace_id = page.workspace_id

    result = db.execute(delete(Block).where(Block.page_id == page.id))
    db.flush()
    db.delete(page)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="page.delete", target_type="page",
        target_id=page_id, workspace_id=workspace_id,
        details={"deleted_blocks": result.rowcount},
    )


def reorder_blocks(db: Session, user: AuthenticatedUser, page_id: int, block_order: List[int]) -> Page:
    """The new order must be a permutation of exactly the page's blocks."""
    require_role(user, UserRole.admin)
    page = get_page(db, user, page_id)

    current = set(db.scalars(select(Block.id).where(Block.page_id == page.id)).all())
    if len(block_order) != len(set(block_order)) or set(block_order) != current:
        raise ValidationError("Block order must list each block of the page exactly once")

    page.block_order = list(block_order)
    page.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="page.reorder_blocks", target_type="page",
        target_id=page.id, workspace_id=page.workspace_id,
    )
    return page
