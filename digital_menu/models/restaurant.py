import sqlalchemy as sa
from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from digital_menu.core.database import Base


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    name_en = Column(String, nullable=False, default="")
    name_ku = Column(String, nullable=True)
    name_ar = Column(String, nullable=True)
    phone_number = Column(String(50), nullable=True)
    google_maps_url = Column(Text, nullable=True)
    # Cores manuais do admin; mescladas sobre DEFAULT_BRAND_COLORS na leitura.
    brand_colors = Column(JSONB().with_variant(sa.JSON(), "sqlite"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
