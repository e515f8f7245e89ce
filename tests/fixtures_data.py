from __future__ import annotations

from types import SimpleNamespace

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from digital_menu.core.database import Base, get_db
from digital_menu.deps import require_admin
import digital_menu.models  # noqa: F401
from digital_menu.models.restaurant import Restaurant

ADMIN = SimpleNamespace(id="admin-1", pin_hash="hashed")


def build_session() -> Session:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


def seed_restaurant(db: Session, *, slug: str = "legends-restaurant", brand_colors=None) -> Restaurant:
    restaurant = Restaurant(
        slug=slug,
        name_en="Legends Restaurant",
        name_ar="مطعم الأساطير",
        phone_number="+9647501234567",
        brand_colors=brand_colors,
    )
    db.add(restaurant)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def build_client(db: Session, *routers, admin=ADMIN) -> TestClient:
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    app.dependency_overrides[get_db] = lambda: db
    if admin is not None:
        app.dependency_overrides[require_admin] = lambda: admin
    return TestClient(app)
