from __future__ import annotations

from copy import deepcopy
from typing import Any

DEFAULT_UI_SETTINGS: dict[str, int] = {
    "sectionTitleSize": 22,
    "categoryTitleSize": 18,
    "itemNameSize": 16,
    "itemDescriptionSize": 14,
    "itemPriceSize": 16,
    "headerLogoSize": 32,
    "bottomNavSectionSize": 18,
    "bottomNavCategorySize": 15,
}

DEFAULT_SIZE_RANGE = (10, 40)
UI_SETTINGS_RANGES: dict[str, tuple[int, int]] = {
    field: DEFAULT_SIZE_RANGE for field in DEFAULT_UI_SETTINGS
}
# O logo pode ser bem maior que os textos
UI_SETTINGS_RANGES["headerLogoSize"] = (16, 80)

# campo (camelCase) -> coluna do modelo UiSettings
UI_SETTINGS_COLUMNS: dict[str, str] = {
    "sectionTitleSize": "section_title_size",
    "categoryTitleSize": "category_title_size",
    "itemNameSize": "item_name_size",
    "itemDescriptionSize": "item_description_size",
    "itemPriceSize": "item_price_size",
    "headerLogoSize": "header_logo_size",
    "bottomNavSectionSize": "bottom_nav_section_size",
    "bottomNavCategorySize": "bottom_nav_category_size",
}


class UiSettingsValidationError(ValueError):
    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        candidate = value.strip()
        if candidate.lstrip("-").isdigit():
            return int(candidate)
    return None


def validate_ui_settings(payload: dict[str, Any]) -> dict[str, int]:
    """Valida os campos presentes no payload.

    Campos ausentes são ignorados. Todos os erros são coletados antes de
    rejeitar; se houver qualquer erro nada deve ser gravado.
    """
    errors: list[str] = []
    settings: dict[str, int] = {}

    for field, (minimum, maximum) in UI_SETTINGS_RANGES.items():
        if field not in payload or payload[field] is None:
            continue

        value = _parse_int(payload[field])
        if value is None:
            errors.append(f"{field} deve ser um número inteiro")
            continue
        if value < minimum or value > maximum:
            errors.append(f"{field} deve estar entre {minimum} e {maximum}")
            continue
        settings[field] = value

    if errors:
        raise UiSettingsValidationError(errors)
    return settings


def default_ui_settings() -> dict[str, int]:
    return deepcopy(DEFAULT_UI_SETTINGS)
