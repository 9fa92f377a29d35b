from __future__ import annotations

from fastapi.routing import APIRoute

from landing.api.delivery.preview import router as delivery_preview_router
from landing.api.delivery.router import router as delivery_router
from landing.api.products import router as products_router
from landing.api.v1.router import api_router
from landing.core.config import create_app
from landing.core.logging import configure_logging
from landing.core.settings import settings
from landing.middleware.ratelimit import RateLimitMiddleware

from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware


app = create_app()
configure_logging()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

# Rate limit opcional (solo si está habilitado en settings)
if settings.RATELIMIT_ENABLED:
    app.add_middleware(RateLimitMiddleware)


def _tag_public_routes(app):
    """
    Todo lo que sirve contenido a la landing es público y de solo lectura;
    en OpenAPI se marca sin requisito de seguridad.
    """
    for route in app.routes:
        if isinstance(route, APIRoute):
            path = route.path or ""
            if path.startswith("/delivery/") or path.startswith("/api/products"):
                extra = dict(route.openapi_extra or {})
                extra["security"] = []
                route.openapi_extra = extra


# API interna (health)
app.include_router(api_router, prefix=settings.API_V1_STR)

# Delivery pública + preview (con tokens) + productos
app.include_router(delivery_router)
app.include_router(delivery_preview_router)
app.include_router(products_router)

_tag_public_routes(app)
