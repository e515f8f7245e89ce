from sqlalchemy import Column, DateTime, Integer, String, func

from digital_menu.core.database import Base

UI_SETTINGS_ID = "ui-settings-1"


class UiSettings(Base):
    __tablename__ = "ui_settings"

    id = Column(String(32), primary_key=True, default=UI_SETTINGS_ID)
    section_title_size = Column(Integer, nullable=False, default=22)
    category_title_size = Column(Integer, nullable=False, default=18)
    item_name_size = Column(Integer, nullable=False, default=16)
    item_description_size = Column(Integer, nullable=False, default=14)
    item_price_size = Column(Integer, nullable=False, default=16)
    header_logo_size = Column(Integer, nullable=False, default=32)
    bottom_nav_section_size = Column(Integer, nullable=False, default=18)
    bottom_nav_category_size = Column(Integer, nullable=False, default=15)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
