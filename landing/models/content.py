# landing/models/content.py
# Modelos de contenido: Page y PageSection (published_content / draft_content en JSONB)
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String, Integer, ForeignKey, DateTime, Enum, UniqueConstraint, Index, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from landing.db.base import Base, JSONType
from landing.models.business import new_id, utcnow

CONTENT_STATUSES = ("published", "dirty", "draft")


def _status_enum(name: str) -> Enum:
    return Enum(
        *CONTENT_STATUSES,
        name=name,
        create_constraint=True,
        validate_strings=True,
        native_enum=False,
    )


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    org_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), index=True)

    slug: Mapped[str] = mapped_column(String(128))     # único por business (e.g., "home")
    name: Mapped[str] = mapped_column(String(160))
    template: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(_status_enum("page_status"), default="draft")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    business: Mapped["Business"] = relationship("Business", back_populates="pages")
    sections: Mapped[list["PageSection"]] = relationship(
        "PageSection", back_populates="page", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("org_id", "slug", name="uq_page_org_slug"),
    )


class PageSection(Base):
    __tablename__ = "page_sections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    page_id: Mapped[str] = mapped_column(ForeignKey("pages.id", ondelete="CASCADE"), index=True)
    org_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), index=True)

    key: Mapped[str] = mapped_column(String(64))          # target estable para el cliente (data-section-key)
    label: Mapped[str] = mapped_column(String(160), default="")
    component: Mapped[str] = mapped_column(String(64))    # nombre del renderer (HeroSection, FinalCTA, ...)
    position: Mapped[int] = mapped_column(Integer, default=0)

    # Ambos pueden venir vacíos, null o mal formados desde el editor
    published_content: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    draft_content: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    status: Mapped[str] = mapped_column(_status_enum("section_status"), default="draft")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    page: Mapped["Page"] = relationship("Page", back_populates="sections")

    __table_args__ = (
        UniqueConstraint("page_id", "key", name="uq_page_section_key"),
        Index("ix_page_sections_page_position", "page_id", "position"),
    )
