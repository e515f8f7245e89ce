from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from fastapi import Request, Response
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy.orm import Session

from digital_menu.core.config import (
    ADMIN_SESSION_COOKIE_SAMESITE,
    ADMIN_SESSION_COOKIE_SECURE,
    ADMIN_SESSION_MAX_AGE_SECONDS,
    ADMIN_SESSION_SECRET,
)
from digital_menu.models.admin_user import ADMIN_USER_ID, AdminUser
from digital_menu.services.passwords import hash_pin, is_valid_pin, pin_looks_hashed, verify_pin

logger = logging.getLogger(__name__)

ADMIN_SESSION_COOKIE = "admin_session"
ADMIN_SESSION_SALT = "admin-session"
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"


def _serializer() -> URLSafeTimedSerializer:
    if not ADMIN_SESSION_SECRET:
        raise RuntimeError("ADMIN_SESSION_SECRET não configurado.")
    return URLSafeTimedSerializer(ADMIN_SESSION_SECRET, salt=ADMIN_SESSION_SALT)


def create_admin_session(payload: Dict[str, Any]) -> str:
    if "exp" not in payload:
        payload = {
            **payload,
            "exp": int(time.time()) + ADMIN_SESSION_MAX_AGE_SECONDS,
        }
    return _serializer().dumps(payload)


def decode_admin_session(token: str) -> Optional[Dict[str, Any]]:
    try:
        payload = _serializer().loads(token, max_age=ADMIN_SESSION_MAX_AGE_SECONDS)
    except (BadSignature, SignatureExpired, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    exp = payload.get("exp")
    if exp is not None:
        try:
            if int(exp) < int(time.time()):
                return None
        except (TypeError, ValueError):
            return None
    return payload


def build_admin_session_cookie_options(request: Request | None = None) -> dict[str, Any]:
    secure = ADMIN_SESSION_COOKIE_SECURE
    samesite = ADMIN_SESSION_COOKIE_SAMESITE

    host = ""
    if request is not None:
        host = (request.headers.get("x-forwarded-host") or request.headers.get("host") or "").lower()
        host = host.split(",")[0].strip().split(":")[0]
        origin = (request.headers.get("origin") or "").strip()
        origin_host = (urlsplit(origin).hostname or "").lower() if origin else ""
        if origin_host and host and origin_host != host and secure:
            samesite = "none"

    # Browsers rejeitam SameSite=None sem Secure.
    if samesite == "none" and not secure:
        samesite = "lax"

    return {
        "httponly": True,
        "samesite": samesite,
        "path": "/",
        "secure": secure,
    }


def set_admin_session_cookie(response: Response, token: str, request: Request | None = None) -> None:
    response.set_cookie(
        key=ADMIN_SESSION_COOKIE,
        value=token,
        max_age=ADMIN_SESSION_MAX_AGE_SECONDS,
        **build_admin_session_cookie_options(request),
    )


def clear_admin_session_cookie(response: Response, request: Request | None = None) -> None:
    response.delete_cookie(
        key=ADMIN_SESSION_COOKIE,
        **build_admin_session_cookie_options(request),
    )


def authenticate_pin(db: Session, pin: str) -> AdminUser | None:
    if not is_valid_pin(pin):
        return None
    admin = db.query(AdminUser).filter(AdminUser.id == ADMIN_USER_ID).first()
    if admin is None or not verify_pin(pin, admin.pin_hash):
        return None
    admin.last_login_at = datetime.utcnow()
    db.commit()
    return admin


def bootstrap_admin_pin(db: Session, pin: str, *, reset: bool = False) -> AdminUser | None:
    """Cria o admin único a partir do PIN configurado, se ainda não existir."""
    if not pin:
        logger.warning("%s skipped: configure ADMIN_PIN.", BOOTSTRAP_PREFIX)
        return None
    if not pin_looks_hashed(pin) and not is_valid_pin(pin):
        raise RuntimeError("ADMIN_PIN deve ter exatamente 4 dígitos")

    pin_hash = pin if pin_looks_hashed(pin) else hash_pin(pin)
    admin = db.query(AdminUser).filter(AdminUser.id == ADMIN_USER_ID).first()
    if admin is not None:
        if reset:
            admin.pin_hash = pin_hash
            db.commit()
            logger.info("%s admin pin reset", BOOTSTRAP_PREFIX)
        else:
            logger.info("%s exists id=%s", BOOTSTRAP_PREFIX, admin.id)
        return admin

    admin = AdminUser(id=ADMIN_USER_ID, pin_hash=pin_hash)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("%s created id=%s", BOOTSTRAP_PREFIX, admin.id)
    return admin
