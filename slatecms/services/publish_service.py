# slatecms/services/publish_service.py
# Page status state machine: draft -> published -> archived
from __future__ import annotations

from typing import Literal

from sqlalchemy.orm import Session

from slatecms.core.errors import InvalidTransition
from slatecms.core.timeutil import utcnow
from slatecms.models.content import Page

Status = Literal["draft", "published", "archived"]
Transition = Literal["publish", "unpublish", "archive"]

# transition -> (allowed source states, destination)
TRANSITIONS: dict[str, tuple[frozenset[str], Status]] = {
    "publish": (frozenset({"draft", "archived"}), "published"),
    "unpublish": (frozenset({"published"}), "draft"),
    "archive": (frozenset({"draft", "published", "archived"}), "archived"),
}


def can_transition(src: str, transition: str) -> bool:
    allowed, _ = TRANSITIONS[transition]
    return src in allowed


def apply_transition(db: Session, page: Page, transition: Transition, *, actor_id: int) -> Page:
    """
    - publish:   sets published_at to now
    - unpublish: clears published_at (a later publish stamps a fresh one)
    - archive:   keeps published_at as history
    """
    if transition not in TRANSITIONS:
        raise InvalidTransition(f"Unknown transition {transition!r}")
    allowed, dst = TRANSITIONS[transition]
    src = page.status
    if src not in allowed:
        raise InvalidTransition(f"Cannot {transition} a page in status {src!r}")

    page.status = dst
    if transition == "publish":
        page.published_at = utcnow()
    elif transition == "unpublish":
        page.published_at = None
    page.updated_by = actor_id

    db.flush()
    return page
