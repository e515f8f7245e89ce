from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from digital_menu.core.config import MEDIA_MAX_BYTES
from digital_menu.core.database import get_db
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser
from digital_menu.schemas.admin import MediaUploadResponse
from digital_menu.services.media_service import MEDIA_CACHE_CONTROL, MediaValidationError, media_service

router = APIRouter(prefix="/api/media", tags=["media"])
logger = logging.getLogger(__name__)


@router.post("/upload", response_model=MediaUploadResponse)
async def upload_media(
    file: UploadFile = File(...),
    _admin: AdminUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    # lê um byte a mais que o limite para detectar arquivo grande sem carregar tudo
    data = await file.read(MEDIA_MAX_BYTES + 1)
    try:
        media = media_service.store(db, data=data, mime_type=file.content_type)
    except MediaValidationError as exc:
        logger.warning("media rejected", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except SQLAlchemyError as exc:
        logger.exception("media upload failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível salvar o arquivo",
        ) from exc

    return {"id": media.id, "mimeType": media.mime_type, "size": media.size}


@router.get("/{media_id}")
def get_media(media_id: str, db: Session = Depends(get_db)):
    media = media_service.load(db, media_id)
    if media is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mídia não encontrada")

    return Response(
        content=bytes(media.data),
        media_type=media.mime_type,
        headers={"Cache-Control": MEDIA_CACHE_CONTROL},
    )
