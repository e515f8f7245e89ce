from fastapi.testclient import TestClient


REQUIRED_ROUTES = {
    "/data/theme",
    "/data/theme.css",
    "/data/theme/palette",
    "/data/restaurant",
    "/api/ui-settings",
    "/api/media/upload",
    "/api/media/{media_id}",
    "/api/admin/login",
    "/api/admin/logout",
    "/api/admin/check-session",
    "/api/admin/theme",
    "/api/admin/branding",
    "/api/admin/ui-settings",
    "/internal/metrics",
}


def test_api_startup_and_router_registration(monkeypatch):
    from digital_menu import main

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    with TestClient(main.app) as client:
        response = client.get("/")
        docs_response = client.get("/docs")
        openapi_response = client.get("/openapi.json")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert docs_response.status_code == 200
    assert openapi_response.status_code == 200

    paths = {getattr(route, "path", None) for route in main.app.routes}
    assert REQUIRED_ROUTES.issubset(paths)
