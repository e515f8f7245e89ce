from __future__ import annotations

from copy import deepcopy
from typing import Any

DEFAULT_BRAND_COLORS: dict[str, str | float] = {
    "menuGradientStart": "#5C0015",
    "menuGradientEnd": "#800020",
    "headerText": "#FFFFFF",
    "headerIcons": "#FFFFFF",
    "activeTab": "#FFFFFF",
    "inactiveTab": "#CCCCCC",
    "categoryCardBg": "#4A5568",
    "itemCardBg": "#4A5568",
    "itemNameText": "#FFFFFF",
    "itemDescText": "#E2E8F0",
    "priceText": "#FBBF24",
    "dividerLine": "#718096",
    "modalBg": "#2D3748",
    "modalOverlay": "rgba(0,0,0,0.7)",
    "buttonBg": "#800020",
    "buttonText": "#FFFFFF",
    "feedbackCardBg": "#4A5568",
    "feedbackCardText": "#FFFFFF",
    "welcomeOverlayColor": "#000000",
    "welcomeOverlayOpacity": 0.5,
}


def merge_brand_colors(stored: Any) -> dict[str, str | float]:
    """Defaults + valores salvos. Chaves extras salvas pelo admin são mantidas."""
    merged = deepcopy(DEFAULT_BRAND_COLORS)
    if not isinstance(stored, dict):
        return merged

    for key, value in stored.items():
        if not isinstance(key, str):
            continue
        if isinstance(value, bool):
            continue
        if isinstance(value, (str, int, float)):
            merged[key] = value
    return merged


def validate_brand_colors(payload: dict[str, Any]) -> dict[str, str | float]:
    normalized: dict[str, str | float] = {}
    for key, value in payload.items():
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError(f"{key} deve ser texto ou número")
        normalized[key] = value.strip() if isinstance(value, str) else value

    opacity = normalized.get("welcomeOverlayOpacity")
    if opacity is not None:
        if isinstance(opacity, str):
            try:
                opacity = float(opacity)
            except ValueError as exc:
                raise ValueError("welcomeOverlayOpacity deve ser um número entre 0 e 1") from exc
        if not 0 <= opacity <= 1:
            raise ValueError("welcomeOverlayOpacity deve ser um número entre 0 e 1")
        normalized["welcomeOverlayOpacity"] = float(opacity)

    return normalized
