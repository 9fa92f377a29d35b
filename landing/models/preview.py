# landing/models/preview.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from landing.db.base import Base
from landing.models.business import utcnow


class PreviewToken(Base):
    """
    Token de preview. El `id` ES la credencial (bearer secret): nunca se loguea completo.
    Los campos de scope (page_id / section_id) son opcionales; org_id siempre existe.
    """
    __tablename__ = "preview_tokens"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    org_id: Mapped[str] = mapped_column(ForeignKey("businesses.id", ondelete="CASCADE"), index=True)
    page_id: Mapped[Optional[str]] = mapped_column(ForeignKey("pages.id", ondelete="CASCADE"), nullable=True)
    section_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("page_sections.id", ondelete="CASCADE"), nullable=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (
        Index("ix_preview_tokens_expires_at", "expires_at"),
    )
