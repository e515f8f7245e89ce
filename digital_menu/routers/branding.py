from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from digital_menu.core.database import get_db
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser
from digital_menu.models.restaurant import Restaurant
from digital_menu.routers.theme import NO_STORE_HEADERS
from digital_menu.schemas.admin import BrandColorsPayload
from digital_menu.services.branding_service import branding_service

router = APIRouter(prefix="/data", tags=["restaurant"])
admin_router = APIRouter(prefix="/api/admin/branding", tags=["admin-branding"])
logger = logging.getLogger(__name__)


def _resolve_restaurant(db: Session, slug: str | None) -> Restaurant:
    restaurant = branding_service.find_restaurant(db, slug)
    if restaurant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurante não encontrado")
    return restaurant


@router.get("/restaurant")
def get_public_restaurant(
    response: Response,
    slug: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    response.headers.update(NO_STORE_HEADERS)
    return branding_service.to_public_payload(_resolve_restaurant(db, slug))


@admin_router.get("")
def get_brand_colors(
    slug: str | None = Query(default=None),
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    restaurant = _resolve_restaurant(db, slug)
    return {"slug": restaurant.slug, "brandColors": branding_service.brand_colors(restaurant)}


@admin_router.put("")
def update_brand_colors(
    payload: BrandColorsPayload,
    slug: str | None = Query(default=None),
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    restaurant = _resolve_restaurant(db, slug)
    try:
        brand_colors = branding_service.update_brand_colors(db, restaurant, payload.brand_colors)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        logger.exception("brand colors save failed", extra={"slug": restaurant.slug})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível salvar as cores da marca",
        ) from exc

    return {"slug": restaurant.slug, "brandColors": brand_colors}
