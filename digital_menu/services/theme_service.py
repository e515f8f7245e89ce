from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from digital_menu.core.config import DEFAULT_APP_BG
from digital_menu.models.media import Media
from digital_menu.models.theme import THEME_ID, Theme

logger = logging.getLogger(__name__)


class MediaNotFoundError(ValueError):
    def __init__(self, media_id: str):
        super().__init__(f"Mídia {media_id} não encontrada")
        self.media_id = media_id


def default_theme_payload() -> dict[str, Any]:
    return {
        "id": THEME_ID,
        "appBg": DEFAULT_APP_BG,
        "backgroundImageMediaId": None,
        "backgroundImage": None,
    }


def media_summary(media: Media | None) -> dict[str, Any] | None:
    if media is None:
        return None
    return {"id": media.id, "mimeType": media.mime_type, "size": media.size}


class ThemeService:
    """Tema único do sistema. Leitura cria o registro com o default se faltar."""

    @staticmethod
    def to_payload(theme: Theme, *, include_media: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": theme.id,
            "appBg": theme.app_bg,
            "backgroundImageMediaId": theme.background_image_media_id,
            "updatedAt": theme.updated_at.isoformat() if theme.updated_at else None,
        }
        if include_media:
            payload["backgroundImage"] = media_summary(theme.background_image)
        return payload

    def get_theme(self, db: Session) -> Theme:
        theme = db.query(Theme).filter(Theme.id == THEME_ID).first()
        if theme is not None:
            return theme

        theme = Theme(id=THEME_ID, app_bg=DEFAULT_APP_BG)
        db.add(theme)
        db.commit()
        db.refresh(theme)
        logger.info("theme created with defaults", extra={"app_bg": theme.app_bg})
        return theme

    def update_theme(
        self,
        db: Session,
        *,
        app_bg: str,
        background_image_media_id: str | None = None,
    ) -> Theme:
        if background_image_media_id:
            exists = db.query(Media.id).filter(Media.id == background_image_media_id).first()
            if exists is None:
                raise MediaNotFoundError(background_image_media_id)

        theme = db.query(Theme).filter(Theme.id == THEME_ID).first()
        if theme is None:
            theme = Theme(id=THEME_ID)
            db.add(theme)

        theme.app_bg = app_bg
        theme.background_image_media_id = background_image_media_id or None

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(theme)
        logger.info("theme updated", extra={"app_bg": theme.app_bg, "media_id": theme.background_image_media_id})
        return theme


theme_service = ThemeService()
