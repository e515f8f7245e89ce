from sqlalchemy import Column, DateTime, Integer, LargeBinary, String, func
from sqlalchemy.orm import deferred

from digital_menu.core.database import Base


class Media(Base):
    __tablename__ = "media"

    id = Column(String(32), primary_key=True)
    mime_type = Column(String(100), nullable=False)
    size = Column(Integer, nullable=False)
    # Blob só é carregado quando o arquivo é servido.
    data = deferred(Column(LargeBinary, nullable=False))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
