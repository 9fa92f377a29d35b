# landing/services/page_service.py
# Resolución business slug → page (dos lecturas, sin caché entre requests)
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing.models.business import Business
from landing.models.content import Page

logger = logging.getLogger(__name__)


def get_business_by_slug(db: Session, business_slug: str) -> Optional[Business]:
    return db.scalar(select(Business).where(Business.slug == business_slug).limit(1))


def resolve_page(db: Session, business_slug: str, page_slug: str) -> Optional[Page]:
    """
    Devuelve la Page de (business_slug, page_slug) o None.

    None cubre tanto "no existe" como errores del store: la landing es pública
    y el caller cae a un estado "no configurado" en vez de fallar.
    """
    if not business_slug or not page_slug:
        return None

    try:
        business = get_business_by_slug(db, business_slug)
        if not business:
            return None

        return db.scalar(
            select(Page)
            .where(and_(Page.org_id == business.id, Page.slug == page_slug))
            .limit(1)
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Page lookup failed for business=%s page=%s", business_slug, page_slug)
        return None
