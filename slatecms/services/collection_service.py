# slatecms/services/collection_service.py
# Publishable workspace collections: FAQs, testimonials, service offerings, projects.
# Admins create, delete and publish; editors patch text. Lists sort by `order`
# (unset sorts last) and then by id.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from slatecms.core.errors import InsufficientRole, SlugTaken, ValidationError
from slatecms.models.auth import UserRole
from slatecms.models.content import Faq, Project, ServiceOffering, Testimonial
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import has_role, is_admin, require_role
from slatecms.services.page_service import validate_slug
from slatecms.services.scoping import find_scoped, get_scoped, require_workspace, scoped_select

UNORDERED = 999

# changing these needs admin even inside an editor patch
_ADMIN_FIELDS = ("slug", "is_published")


@dataclass(frozen=True)
class Collection:
    model: Type[Any]
    kind: str                      # audit prefix and target type
    label: str
    required: Tuple[str, ...]      # columns a patch may not null out
    slugged: bool = False
    categorized: bool = False


FAQS = Collection(Faq, "faq", "FAQ", ("question", "answer"), categorized=True)
TESTIMONIALS = Collection(Testimonial, "testimonial", "Testimonial", ("quote", "author"))
SERVICES = Collection(ServiceOffering, "service", "Service", ("slug", "title"), slugged=True)
PROJECTS = Collection(Project, "project", "Project", ("slug", "title"), slugged=True, categorized=True)


def _ordered(coll: Collection, stmt):
    model = coll.model
    return stmt.order_by(func.coalesce(model.order, UNORDERED), model.id)


def _slug_in_use(db: Session, coll: Collection, workspace_id: int, slug: str, *, exclude_id: Optional[int] = None) -> bool:
    model = coll.model
    stmt = select(model.id).where(and_(model.workspace_id == workspace_id, model.slug == slug))
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    return db.scalar(stmt.limit(1)) is not None


def _flush(db: Session, coll: Collection, slug: Optional[str]) -> None:
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise SlugTaken(f'A {coll.label.lower()} with slug "{slug}" already exists')


# -----------------------------
# Mutations
# -----------------------------
def create_item(db: Session, coll: Collection, user: AuthenticatedUser, payload: BaseModel):
    """New items start unpublished."""
    require_role(user, UserRole.admin)
    workspace_id = require_workspace(user)
    values = payload.model_dump()

    slug = None
    if coll.slugged:
        slug = values["slug"] = validate_slug(values["slug"])
        if _slug_in_use(db, coll, workspace_id, slug):
            raise SlugTaken(f'A {coll.label.lower()} with slug "{slug}" already exists')

    item = coll.model(workspace_id=workspace_id, is_published=False, created_by=user.id, **values)
    db.add(item)
    _flush(db, coll, slug)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=f"{coll.kind}.create", target_type=coll.kind,
        target_id=item.id, workspace_id=workspace_id, details={"slug": slug} if slug else None,
    )
    return item


def update_item(db: Session, coll: Collection, user: AuthenticatedUser, item_id: int, patch: BaseModel):
    require_role(user, UserRole.editor)
    item = get_scoped(db, coll.model, item_id, user, label=coll.label)
    changes = {name: getattr(patch, name) for name in patch.model_fields_set}

    for name, value in changes.items():
        if value is None and (name in coll.required or name == "is_published"):
            raise ValidationError(f"{name} cannot be null")
    for name in _ADMIN_FIELDS:
        if name in changes and changes[name] != getattr(item, name) and not is_admin(user):
            raise InsufficientRole(f"Only admins can change {name}")

    if coll.slugged and changes.get("slug") not in (None, item.slug):
        changes["slug"] = validate_slug(changes["slug"])
        if _slug_in_use(db, coll, item.workspace_id, changes["slug"], exclude_id=item.id):
            raise SlugTaken(f'Slug "{changes["slug"]}" is already taken')

    before = {name: getattr(item, name) for name in changes}
    for name, value in changes.items():
        setattr(item, name, value)
    item.updated_by = user.id
    _flush(db, coll, changes.get("slug"))
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=f"{coll.kind}.update", target_type=coll.kind,
        target_id=item.id, workspace_id=item.workspace_id,
        details={"changed_keys": audit_service.compute_changed_keys(before, changes)},
    )
    return item


def delete_item(db: Session, coll: Collection, user: AuthenticatedUser, item_id: int) -> None:
    require_role(user, UserRole.admin)
    item = get_scoped(db, coll.model, item_id, user, label=coll.label)
    workspace_id = item.workspace_id
    db.delete(item)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action=f"{coll.kind}.delete", target_type=coll.kind,
        target_id=item_id, workspace_id=workspace_id,
    )


# -----------------------------
# Editor reads (soft)
# -----------------------------
def list_all(db: Session, coll: Collection, user: Optional[AuthenticatedUser]) -> List[Any]:
    """Published and unpublished; [] for anonymous or under-privileged callers."""
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return []
    return list(db.scalars(_ordered(coll, scoped_select(coll.model, user.workspace_id))).all())


def get_for_edit(db: Session, coll: Collection, user: Optional[AuthenticatedUser], item_id: int):
    if not has_role(user, UserRole.editor) or user.workspace_id is None:
        return None
    return find_scoped(db, coll.model, item_id, user.workspace_id)


# -----------------------------
# Delivery reads
# -----------------------------
def list_published(db: Session, coll: Collection, workspace_id: int, *, category: Optional[str] = None) -> List[Any]:
    stmt = scoped_select(coll.model, workspace_id).where(coll.model.is_published.is_(True))
    if category and coll.categorized:
        stmt = stmt.where(coll.model.category == category)
    return list(db.scalars(_ordered(coll, stmt)).all())


def get_published_by_slug(db: Session, coll: Collection, workspace_id: int, slug: str):
    """None when absent or unpublished."""
    return db.scalar(
        scoped_select(coll.model, workspace_id).where(
            and_(coll.model.slug == slug, coll.model.is_published.is_(True))
        )
    )
