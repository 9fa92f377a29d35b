# landing/api/products.py
from __future__ import annotations
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from landing.core.settings import settings
from landing.db.session import get_db
from landing.schemas.delivery import ProductListOut
from landing.services.cache_service import apply_products_cache_headers
from landing.services.product_service import list_active_products

router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products", response_model=ProductListOut, summary="Productos activos del business (público)")
def list_products(
    response: Response,
    business_slug: str | None = Query(None, alias="businessSlug"),
    db: Session = Depends(get_db),
):
    slug = (business_slug or "").strip() or settings.DEFAULT_BUSINESS_SLUG
    products = list_active_products(db, slug)
    apply_products_cache_headers(response)
    return ProductListOut(products=products)
