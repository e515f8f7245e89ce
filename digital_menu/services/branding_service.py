from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from digital_menu.models.restaurant import Restaurant
from digital_menu.services.branding import merge_brand_colors, validate_brand_colors
from utils.slug import normalize_slug


class BrandingService:
    def find_restaurant(self, db: Session, slug: str | None = None) -> Restaurant | None:
        """Por slug; sem slug, o primeiro restaurante cadastrado."""
        if slug is not None:
            normalized = normalize_slug(slug)
            if not normalized:
                return None
            return db.query(Restaurant).filter(Restaurant.slug == normalized).first()
        return db.query(Restaurant).order_by(Restaurant.id.asc()).first()

    @staticmethod
    def brand_colors(restaurant: Restaurant) -> dict[str, Any]:
        return merge_brand_colors(restaurant.brand_colors)

    @staticmethod
    def to_public_payload(restaurant: Restaurant) -> dict[str, Any]:
        return {
            "id": restaurant.id,
            "slug": restaurant.slug,
            "nameEn": restaurant.name_en,
            "nameKu": restaurant.name_ku,
            "nameAr": restaurant.name_ar,
            "phoneNumber": restaurant.phone_number,
            "googleMapsUrl": restaurant.google_maps_url,
            "brandColors": merge_brand_colors(restaurant.brand_colors),
        }

    def update_brand_colors(self, db: Session, restaurant: Restaurant, payload: dict[str, Any]) -> dict[str, Any]:
        values = validate_brand_colors(payload)

        stored = dict(restaurant.brand_colors or {})
        stored.update(values)
        # reatribuição para o SQLAlchemy detectar a mudança no JSON
        restaurant.brand_colors = stored

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(restaurant)
        return merge_brand_colors(restaurant.brand_colors)


branding_service = BrandingService()
