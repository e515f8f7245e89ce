from datetime import datetime

from sqlalchemy import Column, DateTime, String

from digital_menu.core.database import Base

ADMIN_USER_ID = "admin-1"


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(String(32), primary_key=True, default=ADMIN_USER_ID)
    pin_hash = Column(String, nullable=False)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
