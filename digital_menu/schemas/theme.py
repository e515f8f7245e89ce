from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ThemePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    app_bg: str = Field(..., alias="appBg", min_length=1, max_length=64)
    background_image_media_id: Optional[str] = Field(default=None, alias="backgroundImageMediaId")

    @field_validator("app_bg")
    @classmethod
    def validate_app_bg(cls, value: str) -> str:
        candidate = value.strip()
        if not candidate:
            raise ValueError("appBg é obrigatório")
        return candidate

    @field_validator("background_image_media_id")
    @classmethod
    def blank_media_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class MediaSummary(BaseModel):
    id: str
    mimeType: str
    size: int


class ThemeRead(BaseModel):
    id: str
    appBg: str
    backgroundImageMediaId: Optional[str] = None
    updatedAt: Optional[str] = None
    backgroundImage: Optional[MediaSummary] = None


class ThemeEnvelope(BaseModel):
    theme: ThemeRead


class ThemeSaveResponse(ThemeEnvelope):
    success: bool = True


class PaletteResponse(BaseModel):
    input: str
    normalized: str
    isLight: bool
    palette: dict[str, str]
    variables: dict[str, Any]
