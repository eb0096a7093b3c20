# slatecms/services/block_service.py
# Blocks: structural ops are admin-only, content edits are open to editors
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from slatecms.core.errors import ContentTooLong, InsufficientRole, TypeChangeRequiresAdmin
from slatecms.models.auth import UserRole
from slatecms.models.content import Block, Page
from slatecms.schemas.content import BlockContent, BlockLayout
from slatecms.services import audit_service
from slatecms.services.auth_service import AuthenticatedUser
from slatecms.services.authz import has_role, is_admin, require_role
from slatecms.services.page_service import get_page, page_blocks_in_order
from slatecms.services.scoping import get_scoped


# -----------------------------
# Content rules (shared with global sections)
# -----------------------------
def _effective_limit(*limits: Optional[int]) -> Optional[int]:
    present = [n for n in limits if n]
    return min(present) if present else None


def check_content_change(
    user: AuthenticatedUser,
    incoming: BlockContent,
    current: Optional[dict] = None,
) -> dict:
    """
    Validate a content payload against the stored one and return the dict to persist.

    - a different `type` needs admin
    - a text `max_length` is structural: editors cannot change it, and when they
      omit it the stored value is carried over
    - a text body may never exceed the stored limit, nor a newly given one
    """
    data = incoming.model_dump(exclude_none=True)
    stored_limit = None

    if current is not None:
        if current.get("type") != incoming.type and not is_admin(user):
            raise TypeChangeRequiresAdmin()

        if incoming.type == "text" and current.get("type") == "text":
            stored_limit = current.get("max_length")
            if "max_length" in incoming.model_fields_set:
                if incoming.max_length != stored_limit and not is_admin(user):
                    raise InsufficientRole("Only admins can change a text block's max_length")
            elif stored_limit is not None:
                data["max_length"] = stored_limit

    if incoming.type == "text":
        limit = _effective_limit(stored_limit, data.get("max_length"))
        if limit is not None and len(incoming.body) > limit:
            raise ContentTooLong(f"Text exceeds maximum length of {limit} characters")

    return data


# -----------------------------
# Reads
# -----------------------------
def get_block(db: Session, user: AuthenticatedUser, block_id: int) -> Block:
    return get_scoped(db, Block, block_id, user, label="Block")


def get_blocks_for_page(db: Session, user: Optional[AuthenticatedUser], page_id: int) -> List[Block]:
    if not has_role(user, UserRole.editor):
        return []
    page = db.get(Page, page_id)
    if page is None or page.workspace_id != user.workspace_id:
        return []
    return page_blocks_in_order(db, page)


# -----------------------------
# Structural (admin)
# -----------------------------
def add_block(
    db: Session,
    user: AuthenticatedUser,
    page_id: int,
    *,
    content: BlockContent,
    layout: Optional[BlockLayout] = None,
    position: Optional[int] = None,
) -> Block:
    require_role(user, UserRole.admin)
    page = get_page(db, user, page_id)
    data = check_content_change(user, content)

    block = Block(
        workspace_id=page.workspace_id,
        page_id=page.id,
        content=data,
        layout=(layout or BlockLayout()).model_dump(exclude_none=True),
        is_structure_locked=False,
        created_by=user.id,
    )
    db.add(block)
    db.flush()

    order = list(page.block_order or [])
    if position is None or position >= len(order):
        order.append(block.id)
    else:
        order.insert(position, block.id)
    page.block_order = order
    page.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.create", target_type="block",
        target_id=block.id, workspace_id=page.workspace_id, details={"type": data["type"]},
    )
    return block


def update_layout(db: Session, user: AuthenticatedUser, block_id: int, layout: BlockLayout) -> Block:
    require_role(user, UserRole.admin)
    block = get_block(db, user, block_id)
    block.layout = layout.model_dump(exclude_none=True)
    block.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.update_layout", target_type="block",
        target_id=block.id, workspace_id=block.workspace_id,
    )
    return block


def toggle_lock(db: Session, user: AuthenticatedUser, block_id: int) -> Block:
    """Advisory flag for editor UIs; it does not gate content edits."""
    require_role(user, UserRole.admin)
    block = get_block(db, user, block_id)
    block.is_structure_locked = not block.is_structure_locked
    block.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.toggle_lock", target_type="block",
        target_id=block.id, workspace_id=block.workspace_id,
        details={"is_structure_locked": block.is_structure_locked},
    )
    return block


def delete_block(db: Session, user: AuthenticatedUser, block_id: int) -> None:
    require_role(user, UserRole.admin)
    block = get_block(db, user, block_id)
    workspace_id = block.workspace_id

    page = db.get(Page, block.page_id)
    if page is not None:
        page.block_order = [bid for bid in (page.block_order or []) if bid != block.id]
        page.updated_by = user.id
    db.delete(block)
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.delete", target_type="block",
        target_id=block_id, workspace_id=workspace_id,
    )


def duplicate_block(db: Session, user: AuthenticatedUser, block_id: int) -> Block:
    """Copy content and layout, unlocked, placed right after the source."""
    require_role(user, UserRole.admin)
    source = get_block(db, user, block_id)

    copy = Block(
        workspace_id=source.workspace_id,
        page_id=source.page_id,
        content=dict(source.content),
        layout=dict(source.layout or {}),
        is_structure_locked=False,
        created_by=user.id,
    )
    db.add(copy)
    db.flush()

    page = db.get(Page, source.page_id)
    if page is not None:
        order = list(page.block_order or [])
        idx = order.index(source.id) + 1 if source.id in order else len(order)
        order.insert(idx, copy.id)
        page.block_order = order
        page.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.duplicate", target_type="block",
        target_id=copy.id, workspace_id=copy.workspace_id, details={"source_id": source.id},
    )
    return copy


# -----------------------------
# Content (editor)
# -----------------------------
def update_content(db: Session, user: AuthenticatedUser, block_id: int, content: BlockContent) -> Block:
    require_role(user, UserRole.editor)
    block = get_block(db, user, block_id)
    before = dict(block.content or {})

    block.content = check_content_change(user, content, current=before)
    block.updated_by = user.id
    db.commit()

    audit_service.record(
        db, actor_id=user.id, action="block.update_content", target_type="block",
        target_id=block.id, workspace_id=block.workspace_id,
        details={"changed_keys": audit_service.compute_changed_keys(before, block.content)},
    )
    return block
