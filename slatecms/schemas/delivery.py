# slatecms/schemas/delivery.py
# Shared by the anonymous and the API-key read paths: both must return the same shape.
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DeliveryBlockOut(BaseModel):
    id: int
    content: dict
    layout: dict


class DeliveryGlobalSectionOut(BaseModel):
    id: int
    name: str
    slug: str
    type: str
    content: dict


class PublishedPageOut(BaseModel):
    id: int
    title: str
    slug: str
    seo: dict
    blocks: list[DeliveryBlockOut]
    header: Optional[DeliveryGlobalSectionOut] = None
    footer: Optional[DeliveryGlobalSectionOut] = None
    published_at: Optional[datetime] = None


class PublishedPageSummaryOut(BaseModel):
    id: int
    title: str
    slug: str
    seo: dict
    published_at: Optional[datetime] = None


class GlobalDefaultsOut(BaseModel):
    header: Optional[DeliveryGlobalSectionOut] = None
    footer: Optional[DeliveryGlobalSectionOut] = None
