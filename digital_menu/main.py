import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from digital_menu.core.config import ADMIN_PIN, CORS_ORIGINS, DATABASE_URL
from digital_menu.core.database import Base, SessionLocal, engine
from digital_menu.core.logging_setup import configure_logging
from digital_menu.core.startup_checks import ensure_migrations_applied, validate_database_environment
from digital_menu.middleware.admin_session import AdminSessionMiddleware
from digital_menu.middleware.observability import ObservabilityMiddleware
import digital_menu.models  # garante que os models são importados antes do create_all
from digital_menu.routers.admin_auth import router as admin_auth_router
from digital_menu.routers.branding import admin_router as admin_branding_router, router as restaurant_router
from digital_menu.routers.internal_metrics import router as internal_metrics_router
from digital_menu.routers.media import router as media_router
from digital_menu.routers.theme import admin_router as admin_theme_router, router as theme_router
from digital_menu.routers.ui_settings import admin_router as admin_ui_settings_router, router as ui_settings_router
from digital_menu.services.admin_auth import BOOTSTRAP_PREFIX, bootstrap_admin_pin

configure_logging()

logger = logging.getLogger(__name__)
RESET_ADMIN_PIN = os.getenv("RESET_ADMIN_PIN", "").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}
REPO_ROOT = Path(__file__).resolve().parents[1]
ALEMBIC_CONFIG_PATH = Path(
    os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini"))
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Digital Menu API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
app.add_middleware(AdminSessionMiddleware)


def _bootstrap_admin() -> None:
    db = SessionLocal()
    try:
        bootstrap_admin_pin(db, ADMIN_PIN, reset=RESET_ADMIN_PIN)
    except Exception:
        logger.exception("%s ERROR bootstrap failed", BOOTSTRAP_PREFIX)
        raise
    finally:
        db.close()


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        # Em produção, use migrations.
        if DATABASE_URL.startswith("sqlite"):
            Base.metadata.create_all(bind=engine)
        ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _bootstrap_admin()
    except Exception:
        logger.exception("%s ERROR startup failed", BOOTSTRAP_PREFIX)
        raise


# Routers
app.include_router(theme_router)
app.include_router(restaurant_router)
app.include_router(ui_settings_router)
app.include_router(media_router)
app.include_router(admin_auth_router)
app.include_router(admin_theme_router)
app.include_router(admin_branding_router)
app.include_router(admin_ui_settings_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
