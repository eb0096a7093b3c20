# slatecms/schemas/content.py
# Pydantic: block payloads (discriminated union), layout, pages, blocks, global sections, site settings
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PageStatus = Literal["draft", "published", "archived"]
GlobalSectionType = Literal["header", "footer", "cta", "custom"]


# ---------- Block content variants ----------
class _ContentBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class HeroContent(_ContentBase):
    type: Literal["hero"] = "hero"
    heading: str
    subheading: Optional[str] = None
    background_image: Optional[str] = None
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    alignment: Optional[Literal["left", "center", "right"]] = None


class TextContent(_ContentBase):
    type: Literal["text"] = "text"
    body: str
    max_length: Optional[int] = Field(None, ge=1)


class ImageContent(_ContentBase):
    type: Literal["image"] = "image"
    src: str
    alt: str
    caption: Optional[str] = None
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)


class CtaContent(_ContentBase):
    type: Literal["cta"] = "cta"
    heading: Optional[str] = None
    description: Optional[str] = None
    button_text: str
    button_link: str
    variant: Optional[Literal["primary", "secondary", "outline"]] = None


BlockContent = Annotated[
    Union[HeroContent, TextContent, ImageContent, CtaContent],
    Field(discriminator="type"),
]


class BlockLayout(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: Optional[Literal["narrow", "medium", "full"]] = None
    padding: Optional[Literal["none", "sm", "md", "lg"]] = None
    background: Optional[str] = None


class PageSeo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    og_image: Optional[str] = None
    no_index: Optional[bool] = None


# ---------- Page ----------
class PageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    # derived from the title when omitted
    slug: Optional[str] = Field(None, max_length=128)
    description: Optional[str] = Field(None, max_length=1024)


class PageMetaUpdate(BaseModel):
    """
    Explicit patch: only fields present in the request body are applied
    (see `model_fields_set`). Slug and header/footer overrides are admin-only.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=128)
    description: Optional[str] = Field(None, max_length=1024)
    seo: Optional[PageSeo] = None
    header_override_id: Optional[int] = None
    footer_override_id: Optional[int] = None


class BlockOrderUpdate(BaseModel):
    block_order: list[int]


class PageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    title: str
    slug: str
    description: Optional[str] = None
    status: PageStatus
    seo: dict
    block_order: list[int]
    header_override_id: Optional[int] = None
    footer_override_id: Optional[int] = None
    published_at: Optional[datetime] = None
    created_by: int
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


# ---------- Block ----------
class BlockCreate(BaseModel):
    content: BlockContent
    layout: BlockLayout = Field(default_factory=BlockLayout)
    # insert position in the page order; appended when omitted or past the end
    position: Optional[int] = Field(None, ge=0)


class BlockContentUpdate(BaseModel):
    content: BlockContent


class BlockLayoutUpdate(BaseModel):
    layout: BlockLayout


class BlockOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    page_id: int
    content: dict
    layout: dict
    is_structure_locked: bool
    created_by: int
    updated_by: Optional[int] = None


class PageForEditOut(PageOut):
    blocks: list[BlockOut] = []


# ---------- Global sections ----------
class GlobalSectionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    slug: str = Field(..., max_length=128)
    type: GlobalSectionType
    content: BlockContent
    is_default: bool = False


class GlobalSectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    name: str
    slug: str
    type: GlobalSectionType
    content: dict
    is_default: bool


# ---------- Site settings ----------
class SocialLinks(BaseModel):
    model_config = ConfigDict(extra="forbid")

    instagram: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    facebook: Optional[str] = None
    youtube: Optional[str] = None


class SiteSettingsUpsert(BaseModel):
    model_config = ConfigDict(extra="forbid")

    site_name: Optional[str] = Field(None, max_length=160)
    tagline: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=1024)
    logo: Optional[str] = None
    favicon: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    social_links: Optional[SocialLinks] = None


class SiteSettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    key: str
    site_name: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    favicon: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    social_links: Optional[dict] = None
    updated_at: Optional[datetime] = None
