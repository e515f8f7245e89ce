from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from digital_menu.core.database import get_db
from digital_menu.core.rate_limiter import RateLimiterService, login_rate_limiter
from digital_menu.deps import get_admin_session_payload
from digital_menu.schemas.admin import AdminLoginPayload, SessionStatus
from digital_menu.services.admin_auth import (
    authenticate_pin,
    build_admin_session_cookie_options,
    clear_admin_session_cookie,
    create_admin_session,
    set_admin_session_cookie,
)

router = APIRouter(prefix="/api/admin", tags=["admin-auth"])
logger = logging.getLogger(__name__)


def get_login_rate_limiter() -> RateLimiterService:
    return login_rate_limiter


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/login", response_model=SessionStatus)
def admin_login(
    payload: AdminLoginPayload,
    response: Response,
    request: Request,
    db: Session = Depends(get_db),
    limiter: RateLimiterService = Depends(get_login_rate_limiter),
):
    client_ip = _client_ip(request)
    decision = limiter.check(key=client_ip)
    if not decision.allowed:
        logger.warning("admin login rate limited", extra={"endpoint": request.url.path})
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Muitas tentativas. Tente novamente em alguns minutos.",
            headers={"Retry-After": str(decision.retry_after_seconds)},
        )

    admin = authenticate_pin(db, payload.pin.strip())
    if admin is None:
        logger.info("admin login failed", extra={"endpoint": request.url.path})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="PIN inválido")

    token = create_admin_session({"admin_id": admin.id})
    cookie_options = build_admin_session_cookie_options(request)
    logger.info(
        "[AUTH_COOKIE] setting admin_session samesite=%s secure=%s",
        cookie_options["samesite"],
        cookie_options["secure"],
    )
    set_admin_session_cookie(response, token, request)
    return {"authenticated": True}


@router.post("/logout")
def admin_logout(response: Response, request: Request):
    clear_admin_session_cookie(response, request)
    return {"ok": True}


@router.get("/check-session", response_model=SessionStatus)
def check_session(request: Request):
    if get_admin_session_payload(request):
        return {"authenticated": True}
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"authenticated": False})
