# landing/services/product_service.py
# Listado público de productos activos por tenant (solo lectura)
from __future__ import annotations

import logging
from typing import Any, List

from sqlalchemy import select, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing.core.settings import settings
from landing.models.business import RetailProduct
from landing.schemas.delivery import ProductOut
from landing.services.page_service import get_business_by_slug

logger = logging.getLogger(__name__)


def _price_as_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _first_benefits(benefits: Any, limit: int) -> List[str]:
    if not isinstance(benefits, list):
        return []
    out = [str(b) for b in benefits if isinstance(b, (str, int, float)) and not isinstance(b, bool)]
    return out[: max(0, limit)]


def to_product_out(product: RetailProduct) -> ProductOut:
    return ProductOut(
        id=product.id,
        name=product.name,
        price=_price_as_float(product.price),
        image_url=product.image_url or "",
        benefits=_first_benefits(product.benefits, settings.PRODUCT_BENEFITS_LIMIT),
        status=product.status or "active",
    )


def list_active_products(db: Session, business_slug: str) -> List[ProductOut]:
    """
    Productos 'active' del business, más recientes primero.
    Business desconocido o error de store → [] (la landing nunca falla por esto).
    """
    try:
        business = get_business_by_slug(db, business_slug)
        if not business:
            logger.info("Products requested for unknown business %s", business_slug)
            return []

        rows = db.scalars(
            select(RetailProduct)
            .where(and_(RetailProduct.business_id == business.id, RetailProduct.status == "active"))
            .order_by(RetailProduct.created_at.desc(), RetailProduct.id.desc())
        ).all()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Product listing failed for business %s", business_slug)
        return []

    return [to_product_out(p) for p in rows]
