from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware

from digital_menu.services.admin_auth import ADMIN_SESSION_COOKIE, decode_admin_session


class AdminSessionMiddleware(BaseHTTPMiddleware):
    """Decodifica o cookie de sessão do admin uma única vez por request."""

    async def dispatch(self, request, call_next):
        request.state.admin_session_payload = None

        if request.url.path.startswith("/api/") or request.url.path.startswith("/internal/"):
            token = request.cookies.get(ADMIN_SESSION_COOKIE)
            if token:
                request.state.admin_session_payload = decode_admin_session(token)

        return await call_next(request)
