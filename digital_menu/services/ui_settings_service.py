from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from digital_menu.models.ui_settings import UI_SETTINGS_ID, UiSettings
from digital_menu.services.ui_settings import (
    DEFAULT_UI_SETTINGS,
    UI_SETTINGS_COLUMNS,
    default_ui_settings,
    validate_ui_settings,
)


class UiSettingsService:
    @staticmethod
    def to_payload(settings: UiSettings | None) -> dict[str, Any]:
        if settings is None:
            return default_ui_settings()
        payload: dict[str, Any] = {}
        for field, column in UI_SETTINGS_COLUMNS.items():
            value = getattr(settings, column, None)
            payload[field] = DEFAULT_UI_SETTINGS[field] if value is None else value
        return payload

    def find_settings(self, db: Session) -> UiSettings | None:
        return db.query(UiSettings).filter(UiSettings.id == UI_SETTINGS_ID).first()

    def get_or_create_settings(self, db: Session) -> UiSettings:
        settings = self.find_settings(db)
        if settings is not None:
            return settings

        settings = UiSettings(id=UI_SETTINGS_ID)
        for field, column in UI_SETTINGS_COLUMNS.items():
            setattr(settings, column, DEFAULT_UI_SETTINGS[field])
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings

    def update_settings(self, db: Session, payload: dict[str, Any]) -> UiSettings:
        """Valida tudo antes de tocar no banco; qualquer erro aborta sem gravar."""
        values = validate_ui_settings(payload)

        settings = self.get_or_create_settings(db)
        for field, value in values.items():
            setattr(settings, UI_SETTINGS_COLUMNS[field], value)

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(settings)
        return settings


ui_settings_service = UiSettingsService()
