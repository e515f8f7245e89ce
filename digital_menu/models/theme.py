from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from digital_menu.core.database import Base

THEME_ID = "theme-1"
DEFAULT_THEME_APP_BG = "#400810"


class Theme(Base):
    """Tema ativo (registro único, id fixo THEME_ID)."""

    __tablename__ = "themes"

    id = Column(String(32), primary_key=True, default=THEME_ID)
    # Aceita qualquer string; a normalização para hex acontece na aplicação do tema.
    app_bg = Column(String(64), nullable=False, default=DEFAULT_THEME_APP_BG)
    background_image_media_id = Column(String(32), ForeignKey("media.id", ondelete="SET NULL"), nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    background_image = relationship("Media")
