# landing/middleware/ratelimit.py
from __future__ import annotations
import logging
import time
import threading
from typing import Callable, Dict, Optional, Tuple
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from landing.core.settings import settings

logger = logging.getLogger(__name__)

WindowState = Tuple[int, int]  # (window_epoch_sec, count)

# Rutas públicas de lectura que comparten el mismo presupuesto por IP
LIMITED_PREFIXES = ("/delivery/v1/", "/api/products")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Límite por minuto con ventanas fijas, en memoria del proceso.
    - Delivery público /delivery/v1/* y /api/products: key por IP.
    """

    def __init__(self, app, limit_per_min: Optional[int] = None, clock: Callable[[], float] = time.time):
        super().__init__(app)
        self._store: Dict[str, WindowState] = {}
        self._window: Optional[int] = None
        self._lock = threading.Lock()
        self._limit = limit_per_min
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit if self._limit is not None else settings.RATELIMIT_DELIVERY_PER_MIN

    def _hit(self, key: str, limit: int) -> bool:
        now = int(self._clock())
        window = now - (now % 60)
        with self._lock:
            if window != self._window:
                # ventana nueva: se descartan las IPs de ventanas anteriores
                self._store = {k: s for k, s in self._store.items() if s[0] >= window}
                self._window = window
            w, c = self._store.get(key, (window, 0))
            if w != window:
                w, c = window, 0
            c += 1
            self._store[key] = (w, c)
            return c <= limit

    async def dispatch(self, request: Request, call_next):
        path = request.url.path or ""
        if request.method.upper() != "GET" or not path.startswith(LIMITED_PREFIXES):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        key = f"deliv:{client_ip}"
        limit = self.limit
        if not self._hit(key, limit):
            logger.warning("Rate limit exceeded for %s on %s", client_ip, path)
            return JSONResponse(
                {"detail": "Rate limit exceeded", "limit_per_min": limit},
                status_code=429,
                headers={"Retry-After": "60"},
            )

        return await call_next(request)
