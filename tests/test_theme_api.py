from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from digital_menu.models.media import Media
from digital_menu.models.theme import Theme
from digital_menu.routers.theme import admin_router as admin_theme_router, router as theme_router
from tests.fixtures_data import build_client, build_session


def _build_client(db=None, admin=True):
    db = db or build_session()
    kwargs = {} if admin else {"admin": None}
    return build_client(db, theme_router, admin_theme_router, **kwargs), db


def test_public_read_creates_default_theme():
    client, db = _build_client()

    response = client.get("/data/theme")

    assert response.status_code == 200
    theme = response.json()["theme"]
    assert theme["id"] == "theme-1"
    assert theme["appBg"] == "#400810"
    assert theme["backgroundImageMediaId"] is None
    assert "no-store" in response.headers["cache-control"]
    assert db.query(Theme).count() == 1


def test_public_read_falls_back_to_default_on_storage_error():
    client, _db = _build_client()

    with patch(
        "digital_menu.routers.theme.theme_service.get_theme",
        side_effect=OperationalError("SELECT", {}, Exception("db down")),
    ):
        response = client.get("/data/theme")

    assert response.status_code == 200
    assert response.json()["theme"]["appBg"] == "#400810"


def test_admin_save_upserts_and_is_visible_publicly():
    client, db = _build_client()

    response = client.put("/api/admin/theme", json={"appBg": "#FFFFFF"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["theme"]["appBg"] == "#FFFFFF"
    assert db.query(Theme).count() == 1

    client.put("/api/admin/theme", json={"appBg": "rgb(10, 20, 30)"})
    public = client.get("/data/theme").json()["theme"]
    assert public["appBg"] == "rgb(10, 20, 30)"
    assert db.query(Theme).count() == 1


def test_admin_save_accepts_any_non_empty_string():
    client, _db = _build_client()

    response = client.put("/api/admin/theme", json={"appBg": "definitely not a color"})

    assert response.status_code == 200
    assert response.json()["theme"]["appBg"] == "definitely not a color"


def test_admin_save_rejects_empty_background():
    client, db = _build_client()

    assert client.put("/api/admin/theme", json={"appBg": ""}).status_code == 422
    assert client.put("/api/admin/theme", json={"appBg": "   "}).status_code == 422
    assert client.put("/api/admin/theme", json={}).status_code == 422
    assert db.query(Theme).count() == 0


def test_admin_save_with_background_image():
    db = build_session()
    db.add(Media(id="m1", mime_type="image/png", size=3, data=b"png"))
    db.commit()
    client, _ = _build_client(db)

    response = client.put("/api/admin/theme", json={"appBg": "#400810", "backgroundImageMediaId": "m1"})

    assert response.status_code == 200
    theme = response.json()["theme"]
    assert theme["backgroundImageMediaId"] == "m1"
    assert theme["backgroundImage"] == {"id": "m1", "mimeType": "image/png", "size": 3}

    cleared = client.put("/api/admin/theme", json={"appBg": "#400810", "backgroundImageMediaId": None})
    assert cleared.json()["theme"]["backgroundImageMediaId"] is None


def test_admin_save_rejects_unknown_media():
    client, db = _build_client()

    response = client.put("/api/admin/theme", json={"appBg": "#400810", "backgroundImageMediaId": "missing"})

    assert response.status_code == 400
    assert db.query(Theme).count() == 0


def test_admin_routes_require_session():
    client, db = _build_client(admin=False)

    put_response = client.put("/api/admin/theme", json={"appBg": "#FFFFFF"})
    get_response = client.get("/api/admin/theme")

    assert put_response.status_code == 401
    assert put_response.json()["detail"] == "Sessão expirada, faça login novamente"
    assert get_response.status_code == 401
    assert db.query(Theme).count() == 0


def test_theme_stylesheet_renders_resolved_variables():
    client, _db = _build_client()
    client.put("/api/admin/theme", json={"appBg": "#FFFFFF"})

    response = client.get("/data/theme.css")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/css")
    assert "--app-bg: #FFFFFF;" in response.text
    assert "--auto-text-primary: #000000;" in response.text
    assert "--auto-lighter-surface: rgba(0, 0, 0, 0.3);" in response.text
    assert "--header-logo-size: 32px;" in response.text


def test_palette_endpoint_normalizes_input():
    client, _db = _build_client()

    response = client.get("/data/theme/palette", params={"color": "rgba(64, 8, 16, 0.4)"})

    assert response.status_code == 200
    body = response.json()
    assert body["normalized"] == "#400810"
    assert body["isLight"] is False
    assert body["palette"]["accent"] == "#FBBF24"
    assert body["variables"]["--auto-edge-accent"] == "rgba(64, 8, 16, 0.4)"
    assert body["variables"]["--app-bg"] == "rgba(64, 8, 16, 0.4)"
