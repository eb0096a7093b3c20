# slatecms/models/content.py
# Content models: Page (ordered block ids), Block, GlobalSection, SiteSetting and the
# publishable collections (FAQs, testimonials, service offerings, projects)
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    JSON, Boolean, DateTime, Enum, ForeignKey, Index, Integer, String, Text, UniqueConstraint, text,
)
from sqlalchemy.orm import Mapped, mapped_column

from slatecms.core.timeutil import utcnow
from slatecms.db.base import Base

PageStatus = Enum(
    "draft", "published", "archived",
    name="page_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)

GlobalSectionType = Enum(
    "header", "footer", "cta", "custom",
    name="global_section_type",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(128))
    description: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    status: Mapped[str] = mapped_column(PageStatus, default="draft")
    seo: Mapped[dict] = mapped_column(JSON, default=dict)

    # rendering order; the list is authoritative, not anything on the block
    block_order: Mapped[list] = mapped_column(JSON, default=list)

    header_override_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("global_sections.id", ondelete="SET NULL"), nullable=True
    )
    footer_override_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("global_sections.id", ondelete="SET NULL"), nullable=True
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("workspace_id", "slug", name="uq_pages_workspace_slug"),
        Index("ix_pages_workspace_status", "workspace_id", "status"),
    )


class Block(Base):
    __tablename__ = "blocks"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)
    page_id: Mapped[int] = mapped_column(ForeignKey("pages.id", ondelete="CASCADE"), index=True)

    content: Mapped[dict] = mapped_column(JSON)   # discriminated on content["type"]
    layout: Mapped[dict] = mapped_column(JSON, default=dict)
    is_structure_locked: Mapped[bool] = mapped_column(Boolean, default=False)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class GlobalSection(Base):
    __tablename__ = "global_sections"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(160))
    slug: Mapped[str] = mapped_column(String(128))
    type: Mapped[str] = mapped_column(GlobalSectionType)
    content: Mapped[dict] = mapped_column(JSON)
    is_default: Mapped[bool] = mapped_column(Boolean, default=False)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("workspace_id", "slug", name="uq_global_sections_workspace_slug"),
        # at most one default per (workspace, type)
        Index(
            "uq_global_sections_default_per_type",
            "workspace_id", "type",
            unique=True,
            sqlite_where=text("is_default = 1"),
            postgresql_where=text("is_default"),
        ),
    )


class SiteSetting(Base):
    __tablename__ = "site_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)
    key: Mapped[str] = mapped_column(String(64), default="general")

    site_name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    tagline: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    logo: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    favicon: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    social_links: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("workspace_id", "key", name="uq_site_settings_workspace_key"),
    )


# ---------- Collections (ordered, publishable lists) ----------
class Faq(Base):
    __tablename__ = "faqs"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    question: Mapped[str] = mapped_column(String(512))
    answer: Mapped[str] = mapped_column(Text)
    category: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_faqs_workspace_published", "workspace_id", "is_published"),
    )


class Testimonial(Base):
    __tablename__ = "testimonials"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    quote: Mapped[str] = mapped_column(Text)
    author: Mapped[str] = mapped_column(String(160))
    project: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    role: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_testimonials_workspace_published", "workspace_id", "is_published"),
    )


class ServiceOffering(Base):
    __tablename__ = "service_offerings"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    slug: Mapped[str] = mapped_column(String(128))
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    deliverables: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    timeline: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("workspace_id", "slug", name="uq_service_offerings_workspace_slug"),
        Index("ix_service_offerings_workspace_published", "workspace_id", "is_published"),
    )


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(primary_key=True)
    workspace_id: Mapped[int] = mapped_column(ForeignKey("workspaces.id", ondelete="CASCADE"), index=True)

    slug: Mapped[str] = mapped_column(String(128))
    title: Mapped[str] = mapped_column(String(255))
    location: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    year: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    brief: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    solution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    outcome: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    stage: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    constraints: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    approach: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    gallery: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"))
    updated_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("workspace_id", "slug", name="uq_projects_workspace_slug"),
        Index("ix_projects_workspace_published", "workspace_id", "is_published"),
    )
