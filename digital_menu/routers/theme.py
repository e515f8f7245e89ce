from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from digital_menu.core.database import get_db
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser
from digital_menu.schemas.theme import PaletteResponse, ThemeEnvelope, ThemePayload, ThemeSaveResponse
from digital_menu.services.branding_service import branding_service
from digital_menu.services.color_utils import generate_color_scheme, is_light_color, normalize_to_hex
from digital_menu.services.document_style import (
    APP_BG_VARIABLE,
    ThemeSnapshot,
    build_theme_stylesheet,
    css_variable_name,
)
from digital_menu.services.theme_service import MediaNotFoundError, default_theme_payload, theme_service
from digital_menu.services.ui_settings_service import ui_settings_service

router = APIRouter(prefix="/data", tags=["theme"])
admin_router = APIRouter(prefix="/api/admin/theme", tags=["admin-theme"])
logger = logging.getLogger(__name__)

# Tema nunca pode ficar preso em cache de navegador/CDN.
NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _read_theme_payload(db: Session) -> dict:
    try:
        return theme_service.to_payload(theme_service.get_theme(db))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("theme read failed, serving default theme")
        return default_theme_payload()


@router.get("/theme", response_model=ThemeEnvelope)
def get_public_theme(response: Response, db: Session = Depends(get_db)):
    response.headers.update(NO_STORE_HEADERS)
    return {"theme": _read_theme_payload(db)}


@router.get("/theme.css", response_class=PlainTextResponse)
def get_theme_stylesheet(
    slug: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    payload = _read_theme_payload(db)
    theme = ThemeSnapshot(
        app_bg=payload["appBg"],
        background_image_media_id=payload.get("backgroundImageMediaId"),
    )

    brand_colors = None
    ui_settings = None
    try:
        if slug:
            restaurant = branding_service.find_restaurant(db, slug)
            if restaurant is not None:
                brand_colors = branding_service.brand_colors(restaurant)
        ui_settings = ui_settings_service.to_payload(ui_settings_service.find_settings(db))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("theme stylesheet extras failed", extra={"slug": slug})

    css = build_theme_stylesheet(theme, brand_colors=brand_colors, ui_settings=ui_settings)
    return PlainTextResponse(css, media_type="text/css", headers=NO_STORE_HEADERS)


@router.get("/theme/palette", response_model=PaletteResponse)
def get_palette(color: str = Query(..., min_length=1, max_length=64)):
    normalized = normalize_to_hex(color.strip())
    palette = generate_color_scheme(normalized).as_dict()
    variables = {APP_BG_VARIABLE: color.strip()}
    variables.update({css_variable_name(role): value for role, value in palette.items()})
    return {
        "input": color,
        "normalized": normalized,
        "isLight": is_light_color(normalized),
        "palette": palette,
        "variables": variables,
    }


@admin_router.get("", response_model=ThemeEnvelope)
def get_admin_theme(
    response: Response,
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    response.headers.update(NO_STORE_HEADERS)
    theme = theme_service.get_theme(db)
    return {"theme": theme_service.to_payload(theme, include_media=True)}


@admin_router.put("", response_model=ThemeSaveResponse)
def update_admin_theme(
    payload: ThemePayload,
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        theme = theme_service.update_theme(
            db,
            app_bg=payload.app_bg,
            background_image_media_id=payload.background_image_media_id,
        )
    except MediaNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        logger.exception("theme save failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível salvar o tema",
        ) from exc

    return {"theme": theme_service.to_payload(theme, include_media=True), "success": True}
