import asyncio

import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from digital_menu.core.database import Base, get_db
from digital_menu.core.rate_limiter import InMemoryRateLimiterService
from digital_menu.main import app
from digital_menu.routers.admin_auth import get_login_rate_limiter
from digital_menu.services.admin_auth import bootstrap_admin_pin
from digital_menu.services.client_cache import THEME_CACHE_KEY, MemoryClientCache
from digital_menu.services.document_style import InlineStyleSurface, StyleDocument
from digital_menu.services.event_bus import EventBus
from digital_menu.services.theme_sync import ThemeEditor, ThemeSyncClient


def _file_database(tmp_path):
    # As buscas do cliente rodam em paralelo; cada request abre a própria sessão.
    engine = create_engine(
        f"sqlite:///{tmp_path / 'menu.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    return SessionLocal, override_get_db


def _document():
    return StyleDocument(root=InlineStyleSurface(), body=InlineStyleSurface())


def test_saved_theme_reaches_storefront_and_other_tabs(tmp_path):
    SessionLocal, override_get_db = _file_database(tmp_path)
    db = SessionLocal()
    try:
        bootstrap_admin_pin(db, "1234")
    finally:
        db.close()

    limiter = InMemoryRateLimiterService(limit=5, window_seconds=900)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_login_rate_limiter] = lambda: limiter

    same_tab_events = EventBus()
    admin_document = _document()
    storefront_document = _document()
    other_tab_document = _document()
    storefront_cache = MemoryClientCache()

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://menu.test") as admin_http, \
                httpx.AsyncClient(transport=transport, base_url="http://menu.test") as public_http:
            storefront = ThemeSyncClient(
                public_http, storefront_document, cache=storefront_cache, events=same_tab_events, retry_delay=0
            )
            other_tab = ThemeSyncClient(public_http, other_tab_document, events=EventBus(), retry_delay=0)
            await storefront.mount()
            await other_tab.mount()
            assert storefront_document.root.get_property("--app-bg") == "#400810"

            login = await admin_http.post("/api/admin/login", json={"pin": "1234"})
            assert login.status_code == 200

            editor = ThemeEditor(admin_http, admin_document, cache=storefront_cache, events=same_tab_events)
            await editor.load()
            editor.preview(app_bg="#FFFFFF")

            # prévia não sai da página do admin
            await storefront.refresh()
            assert admin_document.root.get_property("--app-bg") == "#FFFFFF"
            assert storefront_document.root.get_property("--app-bg") == "#400810"

            await editor.save()
            await storefront.wait_pending()
            assert storefront_document.root.get_property("--app-bg") == "#FFFFFF"
            assert storefront_document.root.get_property("--auto-text-primary") == "#000000"

            # outra aba só vê a mudança no próximo gatilho
            assert other_tab_document.root.get_property("--app-bg") == "#400810"
            await other_tab.on_focus()
            assert other_tab_document.root.get_property("--app-bg") == "#FFFFFF"

            await storefront.stop()
            await other_tab.stop()

    try:
        asyncio.run(scenario())
    finally:
        app.dependency_overrides.clear()

    assert storefront_cache.get(THEME_CACHE_KEY) == "#FFFFFF"


def test_editor_save_without_session_is_rejected(tmp_path):
    _SessionLocal, override_get_db = _file_database(tmp_path)
    app.dependency_overrides[get_db] = override_get_db

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://menu.test") as http:
            response = await http.put("/api/admin/theme", json={"appBg": "#FFFFFF"})
            public = await http.get("/data/theme")
            return response, public

    try:
        response, public = asyncio.run(scenario())
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 401
    assert public.json()["theme"]["appBg"] == "#400810"
