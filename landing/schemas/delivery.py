# landing/schemas/delivery.py
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PageMetaOut(BaseModel):
    id: str
    org_id: str
    slug: str
    name: str
    template: Optional[str] = None
    status: str
    updated_at: Optional[datetime] = None


class DeliverySectionOut(BaseModel):
    section_id: str
    section_key: str
    component: str
    label: str = ""
    position: int
    content: Dict[str, Any] = Field(default_factory=dict, description="Contenido elegido y normalizado")


class DeliveryPageOut(BaseModel):
    page: PageMetaOut
    is_draft_mode: bool
    sections: List[DeliverySectionOut]


class TokenValidationOut(BaseModel):
    valid: bool
    reason: Optional[str] = None


class ProductOut(BaseModel):
    id: str
    name: str
    price: float = 0.0
    image_url: str = ""
    benefits: List[str] = Field(default_factory=list)
    status: str = "active"


class ProductListOut(BaseModel):
    products: List[ProductOut] = Field(default_factory=list)
