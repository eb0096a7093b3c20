# slatecms/services/delivery_service.py
# Public reads: only published pages, hydrated with ordered blocks and header/footer.
# Anonymous and API-key transports both go through these functions.
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from slatecms.models.content import Block, GlobalSection, Page
from slatecms.schemas.delivery import (
    DeliveryBlockOut, DeliveryGlobalSectionOut, GlobalDefaultsOut,
    PublishedPageOut, PublishedPageSummaryOut,
)


def _section_out(section: Optional[GlobalSection]) -> Optional[DeliveryGlobalSectionOut]:
    if section is None:
        return None
    return DeliveryGlobalSectionOut(
        id=section.id, name=section.name, slug=section.slug,
        type=section.type, content=section.content or {},
    )


def _default_section(db: Session, workspace_id: int, type_: str) -> Optional[GlobalSection]:
    return db.scalar(
        select(GlobalSection).where(
            and_(
                GlobalSection.workspace_id == workspace_id,
                GlobalSection.type == type_,
                GlobalSection.is_default.is_(True),
            )
        ).limit(1)
    )


def _override_or_default(db: Session, page: Page, override_id: Optional[int], type_: str) -> Optional[GlobalSection]:
    if override_id is not None:
        section = db.get(GlobalSection, override_id)
        if section is not None and section.workspace_id == page.workspace_id:
            return section
    return _default_section(db, page.workspace_id, type_)


def hydrate_page(db: Session, page: Page) -> PublishedPageOut:
    rows = db.scalars(select(Block).where(Block.page_id == page.id)).all()
    by_id = {b.id: b for b in rows}
    blocks = [
        DeliveryBlockOut(id=by_id[bid].id, content=by_id[bid].content or {}, layout=by_id[bid].layout or {})
        for bid in (page.block_order or [])
        if bid in by_id
    ]
    return PublishedPageOut(
        id=page.id,
        title=page.title,
        slug=page.slug,
        seo=page.seo or {},
        blocks=blocks,
        header=_section_out(_override_or_default(db, page, page.header_override_id, "header")),
        footer=_section_out(_override_or_default(db, page, page.footer_override_id, "footer")),
        published_at=page.published_at,
    )


def get_published_page(db: Session, *, workspace_id: int, slug: str) -> Optional[PublishedPageOut]:
    """None when the slug is unknown or the page is not published."""
    page = db.scalar(
        select(Page).where(
            and_(Page.workspace_id == workspace_id, Page.slug == slug, Page.status == "published")
        )
    )
    if page is None:
        return None
    return hydrate_page(db, page)


def list_published(db: Session, *, workspace_id: int) -> List[PublishedPageSummaryOut]:
    pages = db.scalars(
        select(Page)
        .where(and_(Page.workspace_id == workspace_id, Page.status == "published"))
        .order_by(Page.published_at.desc(), Page.id.desc())
    ).all()
    return [
        PublishedPageSummaryOut(id=p.id, title=p.title, slug=p.slug, seo=p.seo or {}, published_at=p.published_at)
        for p in pages
    ]


def get_defaults(db: Session, *, workspace_id: int) -> GlobalDefaultsOut:
    return GlobalDefaultsOut(
        header=_section_out(_default_section(db, workspace_id, "header")),
        footer=_section_out(_default_section(db, workspace_id, "footer")),
    )
