# digital_menu/deps.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from digital_menu.core.database import get_db
from digital_menu.models.admin_user import AdminUser
from digital_menu.services.admin_auth import ADMIN_SESSION_COOKIE, decode_admin_session

logger = logging.getLogger(__name__)

SESSION_EXPIRED_DETAIL = "Sessão expirada, faça login novamente"


def get_admin_session_payload(request: Request) -> Optional[Dict[str, Any]]:
    """Payload decodificado pelo middleware; decodifica o cookie se o middleware não rodou."""
    if hasattr(request.state, "admin_session_payload"):
        return request.state.admin_session_payload
    token = request.cookies.get(ADMIN_SESSION_COOKIE)
    if not token:
        return None
    return decode_admin_session(token)


def require_admin(
    request: Request,
    db: Session = Depends(get_db),
) -> AdminUser:
    payload = get_admin_session_payload(request)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SESSION_EXPIRED_DETAIL)

    admin_id = payload.get("admin_id")
    admin = db.query(AdminUser).filter(AdminUser.id == admin_id).first() if admin_id else None
    if admin is None:
        logger.warning("admin session without matching admin", extra={"endpoint": request.url.path})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=SESSION_EXPIRED_DETAIL)

    request.state.admin = admin
    return admin
