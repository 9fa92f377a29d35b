# landing/services/cache_service.py
# ⟶ ETag + Cache-Control para delivery pública; preview/draft nunca se cachea
from __future__ import annotations

import hashlib
import json
from datetime import date, datetime, timezone
from typing import Any

from fastapi import Response

from landing.core.settings import settings

NO_STORE = "private, no-store"


def json_default(o: Any):
    """
    Serializa datetime/date a ISO-8601. Para datetime naive, asume UTC.
    """
    if isinstance(o, datetime):
        if o.tzinfo is None:
            o = o.replace(tzinfo=timezone.utc)
        else:
            o = o.astimezone(timezone.utc)
        return o.replace(microsecond=0).isoformat()
    if isinstance(o, date):
        return o.isoformat()
    raise TypeError(f"Type not serializable: {type(o)}")


def dump_body(payload: Any) -> bytes:
    return json.dumps(
        payload, separators=(",", ":"), ensure_ascii=False, default=json_default
    ).encode("utf-8")


def compute_etag_from_bytes(body: bytes) -> str:
    """
    ETag como sha256 hex (entre comillas) del cuerpo bytes.
    """
    return '"' + hashlib.sha256(body).hexdigest() + '"'


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = [c.strip() for c in if_none_match.split(",")]
    return "*" in candidates or etag in candidates or etag.strip('"') in candidates


# -----------------------------
# Políticas de caché
# -----------------------------
def cache_policy_for_page() -> dict[str, str]:
    return {
        "Cache-Control": (
            f"public, max-age={settings.DELIVERY_CACHE_MAX_AGE}, "
            f"stale-while-revalidate={settings.DELIVERY_CACHE_SWR}"
        ),
    }


def cache_policy_for_products() -> dict[str, str]:
    return {
        "Cache-Control": (
            f"public, s-maxage={settings.PRODUCTS_CACHE_S_MAXAGE}, "
            f"stale-while-revalidate={settings.PRODUCTS_CACHE_SWR}"
        ),
    }


def apply_no_store(resp: Response) -> None:
    """Respuestas con preview token: scope de tenant + token, jamás cacheables."""
    resp.headers["Cache-Control"] = NO_STORE
    resp.headers["Vary"] = "Authorization, Cookie"
    if "ETag" in resp.headers:
        del resp.headers["ETag"]


def apply_delivery_cache_headers(resp: Response, *, etag: str | None, is_draft: bool) -> None:
    if is_draft:
        apply_no_store(resp)
        return
    if etag:
        resp.headers["ETag"] = etag
    for k, v in cache_policy_for_page().items():
        resp.headers[k] = v


def apply_products_cache_headers(resp: Response) -> None:
    for k, v in cache_policy_for_products().items():
        resp.headers[k] = v
