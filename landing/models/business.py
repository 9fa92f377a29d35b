# landing/models/business.py
# Tenant (business) y su catálogo de productos de solo lectura
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import String, Numeric, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from landing.db.base import Base, JSONType


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Business(Base):
    __tablename__ = "businesses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    slug: Mapped[str] = mapped_column(String(80), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(160))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    pages: Mapped[list["Page"]] = relationship("Page", back_populates="business", cascade="all, delete-orphan")
    products: Mapped[list["RetailProduct"]] = relationship(
        "RetailProduct", back_populates="business", cascade="all, delete-orphan"
    )


class RetailProduct(Base):
    __tablename__ = "retail_products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    business_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(200))
    # numeric en DB; la API siempre lo expone como float
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    benefits: Mapped[Optional[list]] = mapped_column(JSONType, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="active")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    business: Mapped["Business"] = relationship("Business", back_populates="products")

    __table_args__ = (
        Index("ix_retail_products_business_status", "business_id", "status"),
    )
