# slatecms/schemas/collections.py
# Pydantic: FAQs, testimonials, service offerings, projects
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workspace_id: int
    is_published: bool
    order: Optional[int] = None
    created_by: int
    updated_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class _ItemUpdate(BaseModel):
    """
    Explicit patch, applied by `model_fields_set`. Publishing and slug
    changes are admin-only; everything else is open to editors.
    """
    model_config = ConfigDict(extra="forbid")

    order: Optional[int] = None
    is_published: Optional[bool] = None


# ---------- FAQs ----------
class FaqCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question: str = Field(..., min_length=1, max_length=512)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=80)
    order: Optional[int] = None


class FaqUpdate(_ItemUpdate):
    question: Optional[str] = Field(None, min_length=1, max_length=512)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=80)


class FaqOut(_ItemOut):
    question: str
    answer: str
    category: Optional[str] = None


# ---------- Testimonials ----------
class TestimonialCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quote: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1, max_length=160)
    project: Optional[str] = Field(None, max_length=160)
    role: Optional[str] = Field(None, max_length=160)
    avatar: Optional[str] = Field(None, max_length=512)
    order: Optional[int] = None


class TestimonialUpdate(_ItemUpdate):
    quote: Optional[str] = Field(None, min_length=1)
    author: Optional[str] = Field(None, min_length=1, max_length=160)
    project: Optional[str] = Field(None, max_length=160)
    role: Optional[str] = Field(None, max_length=160)
    avatar: Optional[str] = Field(None, max_length=512)


class TestimonialOut(_ItemOut):
    quote: str
    author: str
    project: Optional[str] = None
    role: Optional[str] = None
    avatar: Optional[str] = None


# ---------- Service offerings ----------
class ServiceOfferingCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slug: str = Field(..., max_length=128)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    deliverables: Optional[list[str]] = None
    timeline: Optional[str] = Field(None, max_length=160)
    icon: Optional[str] = Field(None, max_length=160)
    order: Optional[int] = None


class ServiceOfferingUpdate(_ItemUpdate):
    slug: Optional[str] = Field(None, max_length=128)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    deliverables: Optional[list[str]] = None
    timeline: Optional[str] = Field(None, max_length=160)
    icon: Optional[str] = Field(None, max_length=160)


class ServiceOfferingOut(_ItemOut):
    slug: str
    title: str
    description: Optional[str] = None
    deliverables: Optional[list[str]] = None
    timeline: Optional[str] = None
    icon: Optional[str] = None


# ---------- Projects ----------
class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slug: str = Field(..., max_length=128)
    title: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=160)
    year: Optional[str] = Field(None, max_length=16)
    category: Optional[str] = Field(None, max_length=80)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=512)
    brief: Optional[str] = None
    solution: Optional[str] = None
    outcome: Optional[str] = None
    size: Optional[str] = Field(None, max_length=80)
    stage: Optional[str] = Field(None, max_length=80)
    constraints: Optional[str] = None
    approach: Optional[str] = None
    gallery: Optional[list[str]] = None
    order: Optional[int] = None


class ProjectUpdate(_ItemUpdate):
    slug: Optional[str] = Field(None, max_length=128)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = Field(None, max_length=160)
    year: Optional[str] = Field(None, max_length=16)
    category: Optional[str] = Field(None, max_length=80)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=512)
    brief: Optional[str] = None
    solution: Optional[str] = None
    outcome: Optional[str] = None
    size: Optional[str] = Field(None, max_length=80)
    stage: Optional[str] = Field(None, max_length=80)
    constraints: Optional[str] = None
    approach: Optional[str] = None
    gallery: Optional[list[str]] = None


class ProjectOut(_ItemOut):
    slug: str
    title: str
    location: Optional[str] = None
    year: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    brief: Optional[str] = None
    solution: Optional[str] = None
    outcome: Optional[str] = None
    size: Optional[str] = None
    stage: Optional[str] = None
    constraints: Optional[str] = None
    approach: Optional[str] = None
    gallery: Optional[list[str]] = None
