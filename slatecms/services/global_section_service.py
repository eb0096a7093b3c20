# slatecms/services/global_section_service.py
# Reusable header/footer/cta/custom sections; at most one default per (workspace, type)
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slatecms.core.errors import Conflict, SlugTaken
from slatecms.models.auth import UserRole
from slatecms.models.content import GlobalSection, Page
from slatecms.schemas.content import BlockContent
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import has_role, require_role
from slatecms.services.block_service import check_content_change
from slatecms.services.page_service import validate_slug
from slatecms.services.scoping import get_scoped, require_workspace, scoped_select


def _slug_in_use(db: Session, workspace_id: int, slug: str) -> bool:
    stmt = select(GlobalSection.id).where(
        and_(GlobalSection.workspace_id == workspace_id, GlobalSection.slug == slug)
    )
    return db.scalar(stmt.limit(1)) is not None


def _clear_default(db: Session, workspace_id: int, type_: str) -> None:
    """Step one of clear-then-set; flushed so the partial unique index never sees two defaults."""
    db.execute(
        update(GlobalSection)
        .where(
            and_(
                GlobalSection.workspace_id == workspace_id,
                GlobalSection.type == type_,
                GlobalSection.is_default.is_(True),
            )
        )
        .values(is_default=False)
        .execution_options(synchronize_session="fetch")
    )
    db.flush()


# -----------------------------
# Mutations
# -----------------------------
def create_global_section(
    db: Session,
    user: AuthenticatedUser,
    *,
    name: str,
    slug: str,
    type: str,
    content: BlockContent,
    is_default: bool = False,
) -> GlobalSection:
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)
    slug = validate_slug(slug)
    if _slug_in_use(db, workspace_id, slug):
        raise SlugTaken(f'A global section with slug "{slug}" already exists')

    data = check_content_change(user, content)
    try:
        if is_default:
            _clear_default(db, workspace_id, type)
        section = GlobalSection(
            workspace_id=workspace_id,
            name=name,
            slug=slug,
            type=type,
            content=data,
            is_default=is_default,
            created_by=user.id,
        )
        db.add(section)
        db.flush()
    except IntegrityError:
        db.rollback()
        if _slug_in_use(db, workspace_id, slug):
            raise SlugTaken(f'A global section with slug "{slug}" already exists')
        raise Conflict("Another default was set concurrently, retry")
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="globalSection.create", target_type="globalSection",
        target_id=section.id, workspace_id=workspace_id,
        details={"type": type, "is_default": is_default},
    )
    return section


def set_default(db: Session, user: AuthenticatedUser, section_id: int) -> GlobalSection:
    require_role(user, UserRole.admin)
    section = get_scoped(db, GlobalSection, section_id, user, label="Global section")

    try:
        _clear_default(db, section.workspace_id, section.type)
        section.is_default = True
        section.updated_by = user.id
        db.flush()
    except IntegrityError:
        db.rollback()
        raise Conflict("Another default was set concurrently, retry")
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="globalSection.set_default", target_type="globalSection",
        target_id=section.id, workspace_id=section.workspace_id, details={"type": section.type},
    )
    return section


def update_global_section_content(
    db: Session, user: AuthenticatedUser, section_id: int, content: BlockContent
) -> GlobalSection:
    """Same rules as block content: type changes need admin, text limits hold for everyone."""
    require_role(user, UserRole.editor)
    section = get_scoped(db, GlobalSection, section_id, user, label="Global section")
    before = dict(section.content or {})

    section.content = check_content_change(user, content, current=before)
    section.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="globalSection.update_content", target_type="globalSection",
        target_id=section.id, workspace_id=section.workspace_id,
        details={"changed_keys": audit_service.compute_changed_keys(before, section.content)},
    )
    return section


def delete_global_section(db: Session, user: AuthenticatedUser, section_id: int) -> None:
    require_role(user, UserRole.admin)
    section = get_scoped(db, GlobalSection, section_id, user, label="Global section")
    workspace_id = section.workspace_id

    # pages pointing at the section fall back to the workspace default
    for column in (Page.header_override_id, Page.footer_override_id):
        db.execute(
            update(Page)
            .where(and_(Page.workspace_id == workspace_id, column == section.id))
            .values({column.key: None})
            .execution_options(synchronize_session="fetch")
        )
    db.flush()
    db.delete(section)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="globalSection.delete", target_type="globalSection",
        target_id=section_id, workspace_id=workspace_id,
    )


# -----------------------------
# Reads (soft)
# -----------------------------
def list_global_sections(db: Session, user: Optional[AuthenticatedUser]) -> List[GlobalSection]:
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return []
    stmt = scoped_select(GlobalSection, user.workspace_id).order_by(GlobalSection.type, GlobalSection.name)
    return list(db.scalars(stmt).all())


def get_global_section_by_slug(
    db: Session, user: Optional[AuthenticatedUser], slug: str
) -> Optional[GlobalSection]:
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return None
    return db.scalar(
        scoped_select(GlobalSection, user.workspace_id).where(GlobalSection.slug == slug)
    )
