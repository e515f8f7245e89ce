from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AdminLoginPayload(BaseModel):
    pin: str = Field(..., min_length=1, max_length=16)


class SessionStatus(BaseModel):
    authenticated: bool


class BrandColorsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    brand_colors: dict[str, Any] = Field(..., alias="brandColors")


class MediaUploadResponse(BaseModel):
    id: str
    mimeType: str
    size: int
