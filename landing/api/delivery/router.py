#  landing/api/delivery/router.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from sqlalchemy.orm import Session

from landing.core.settings import settings
from landing.db.session import get_db
from landing.schemas.delivery import DeliveryPageOut
from landing.services.cache_service import (
    apply_delivery_cache_headers,
    apply_no_store,
    compute_etag_from_bytes,
    dump_body,
    etag_matches,
)
from landing.services.delivery_service import resolve_page_content, to_delivery_out
from landing.web.ui.section_renderer import render_not_configured, render_page

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])


def _business_slug(value: Optional[str]) -> str:
    # El tenant por defecto es configuración del borde HTTP, no del core
    return (value or "").strip() or settings.DEFAULT_BUSINESS_SLUG


@router.get(
    "/pages/{page_slug}",
    response_model=DeliveryPageOut,
    summary="Contenido resuelto de una página (público / preview con token)",
)
def get_page(
    page_slug: str,
    business_slug: str | None = Query(None, description="Slug del business (default: tenant configurado)"),
    token: str | None = Query(None, description="Preview token (opcional)"),
    db: Session = Depends(get_db),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    """
    Devuelve página + secciones con el contenido elegido y normalizado.
    - Sin token válido: solo secciones publicadas, ETag (If-None-Match → 304) y caché pública corta.
    - Con token válido: draft-first, `private, no-store`, sin ETag.
    """
    result = resolve_page_content(db, _business_slug(business_slug), page_slug, token)
    if result is None:
        raise HTTPException(status_code=404, detail="Page not found")

    out = to_delivery_out(result)
    body_bytes = dump_body(out.model_dump(mode="json"))

    if result.is_draft_mode:
        resp = Response(content=body_bytes, media_type="application/json")
        apply_delivery_cache_headers(resp, etag=None, is_draft=True)
        return resp

    etag = compute_etag_from_bytes(body_bytes)
    if etag_matches(if_none_match, etag):
        resp = Response(status_code=304)
        apply_delivery_cache_headers(resp, etag=etag, is_draft=False)
        return resp

    resp = Response(content=body_bytes, media_type="application/json")
    apply_delivery_cache_headers(resp, etag=etag, is_draft=False)
    return resp


@router.get(
    "/pages/{page_slug}/render",
    summary="Render model de la página (TOC + bloques por sección)",
)
def get_page_render(
    page_slug: str,
    business_slug: str | None = Query(None),
    token: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """
    Igual que /pages/{slug} pero pasando cada sección por el dispatcher de componentes.
    Una página no configurada responde 200 con `configured=false` y un placeholder.
    """
    result = resolve_page_content(db, _business_slug(business_slug), page_slug, token)
    if result is None:
        render = render_not_configured()
        resp = Response(content=dump_body(render.to_dict()), media_type="application/json")
        # con token la respuesta nunca se cachea, aunque la página no exista
        if token:
            apply_no_store(resp)
        else:
            apply_delivery_cache_headers(resp, etag=None, is_draft=False)
        return resp

    render = render_page(result.page, result.sections, is_draft_mode=result.is_draft_mode)
    resp = Response(content=dump_body(render.to_dict()), media_type="application/json")
    apply_delivery_cache_headers(resp, etag=None, is_draft=result.is_draft_mode)
    return resp
