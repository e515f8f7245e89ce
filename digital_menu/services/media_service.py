from __future__ import annotations

import logging
from uuid import uuid4

from sqlalchemy.orm import Session, undefer

from digital_menu.core.config import MEDIA_MAX_BYTES
from digital_menu.models.media import Media

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")
ALLOWED_VIDEO_TYPES = ("video/mp4",)
ALLOWED_MEDIA_TYPES = ALLOWED_IMAGE_TYPES + ALLOWED_VIDEO_TYPES
MEDIA_CACHE_CONTROL = "public, max-age=31536000, immutable"


class MediaValidationError(ValueError):
    pass


def validate_media(mime_type: str | None, size: int, *, max_bytes: int | None = None) -> str:
    max_bytes = MEDIA_MAX_BYTES if max_bytes is None else max_bytes
    normalized = (mime_type or "").split(";")[0].strip().lower()
    if normalized not in ALLOWED_MEDIA_TYPES:
        raise MediaValidationError("Apenas imagens JPEG, PNG, WebP e vídeos MP4 são permitidos")
    if size <= 0:
        raise MediaValidationError("Arquivo vazio")
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise MediaValidationError(f"Arquivo deve ter menos de {limit_mb:g}MB")
    return normalized


class MediaService:
    def store(self, db: Session, *, data: bytes, mime_type: str | None) -> Media:
        normalized = validate_media(mime_type, len(data))
        media = Media(id=uuid4().hex, mime_type=normalized, size=len(data), data=data)
        db.add(media)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(media)
        logger.info("media stored", extra={"media_id": media.id})
        return media

    def load(self, db: Session, media_id: str) -> Media | None:
        return (
            db.query(Media)
            .options(undefer(Media.data))
            .filter(Media.id == media_id)
            .first()
        )


media_service = MediaService()
