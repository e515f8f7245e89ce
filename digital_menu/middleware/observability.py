from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from digital_menu.core.metrics import request_metrics
from digital_menu.core.request_context import clear_request_context, set_request_context

logger = logging.getLogger(__name__)

RESTAURANT_SLUG_HEADER = "X-Restaurant-Slug"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Request id, métricas por rota e uma linha de log por request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        restaurant_slug = _restaurant_slug(request)
        request.state.request_id = request_id
        set_request_context(request_id=request_id, restaurant_slug=restaurant_slug)

        response = None
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            endpoint = _route_template(request)
            request_metrics.observe(
                endpoint=endpoint,
                method=request.method,
                status_code=status_code,
                duration_ms=duration_ms,
            )

            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "restaurant_slug": restaurant_slug,
                    "endpoint": endpoint,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            if response is not None:
                response.headers["X-Request-ID"] = request_id

            clear_request_context()


def _route_template(request: Request) -> str:
    # Depois do roteamento o scope guarda a rota; ids de mídia não viram chaves novas.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _restaurant_slug(request: Request) -> str | None:
    slug = request.query_params.get("slug") or request.headers.get(RESTAURANT_SLUG_HEADER)
    if not slug:
        return None
    return slug.strip() or None
