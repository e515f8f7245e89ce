from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from digital_menu.core.database import get_db
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser
from digital_menu.routers.theme import NO_STORE_HEADERS
from digital_menu.services.ui_settings import UiSettingsValidationError, default_ui_settings
from digital_menu.services.ui_settings_service import ui_settings_service

router = APIRouter(prefix="/api/ui-settings", tags=["ui-settings"])
admin_router = APIRouter(prefix="/api/admin/ui-settings", tags=["admin-ui-settings"])
logger = logging.getLogger(__name__)


def _validation_failed(details: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


@router.get("")
def get_public_ui_settings(response: Response, db: Session = Depends(get_db)):
    response.headers.update(NO_STORE_HEADERS)
    try:
        return ui_settings_service.to_payload(ui_settings_service.find_settings(db))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("ui settings read failed, serving defaults")
        return default_ui_settings()


@admin_router.get("")
def get_admin_ui_settings(
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ui_settings_service.to_payload(ui_settings_service.get_or_create_settings(db))


@admin_router.put("")
def update_admin_ui_settings(
    payload: Any = Body(...),
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    if not isinstance(payload, dict):
        return _validation_failed(["corpo da requisição deve ser um objeto JSON"])

    try:
        settings = ui_settings_service.update_settings(db, payload)
    except UiSettingsValidationError as exc:
        return _validation_failed(exc.errors)
    except SQLAlchemyError as exc:
        logger.exception("ui settings save failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível salvar as configurações de tipografia",
        ) from exc

    return ui_settings_service.to_payload(settings)
