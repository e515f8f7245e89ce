from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from digital_menu.core.rate_limiter import InMemoryRateLimiterService
from digital_menu.deps import require_admin
from digital_menu.models.admin_user import AdminUser
from digital_menu.routers.admin_auth import get_login_rate_limiter, router as admin_auth_router
from digital_menu.routers.theme import admin_router as admin_theme_router
from digital_menu.services.admin_auth import (
    ADMIN_SESSION_COOKIE,
    bootstrap_admin_pin,
    create_admin_session,
    decode_admin_session,
)
from tests.fixtures_data import build_client, build_session


def _build_client(limit: int = 5):
    db = build_session()
    bootstrap_admin_pin(db, "1234")
    client = build_client(db, admin_auth_router, admin_theme_router, admin=None)
    limiter = InMemoryRateLimiterService(limit=limit, window_seconds=900)
    client.app.dependency_overrides[get_login_rate_limiter] = lambda: limiter
    return client, db


def _build_request(cookie: str | None = None) -> Request:
    headers = []
    if cookie is not None:
        headers.append((b"cookie", f"{ADMIN_SESSION_COOKIE}={cookie}".encode()))
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/admin/theme",
        "query_string": b"",
        "headers": headers,
        "path_params": {},
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
        "scheme": "http",
    }
    return Request(scope)


def test_login_sets_http_only_session_cookie():
    client, db = _build_client()

    response = client.post("/api/admin/login", json={"pin": "1234"})

    assert response.status_code == 200
    assert response.json() == {"authenticated": True}
    set_cookie = response.headers.get("set-cookie", "")
    assert f"{ADMIN_SESSION_COOKIE}=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert "SameSite=lax" in set_cookie
    assert db.query(AdminUser).one().last_login_at is not None


def test_wrong_pin_is_rejected():
    client, _db = _build_client()

    response = client.post("/api/admin/login", json={"pin": "9999"})

    assert response.status_code == 401
    assert "set-cookie" not in response.headers


def test_session_flow_protects_admin_writes():
    client, _db = _build_client()

    assert client.get("/api/admin/check-session").status_code == 401
    assert client.get("/api/admin/check-session").json() == {"authenticated": False}
    assert client.put("/api/admin/theme", json={"appBg": "#FFFFFF"}).status_code == 401

    client.post("/api/admin/login", json={"pin": "1234"})

    assert client.get("/api/admin/check-session").json() == {"authenticated": True}
    assert client.put("/api/admin/theme", json={"appBg": "#FFFFFF"}).status_code == 200

    logout = client.post("/api/admin/logout")
    assert logout.status_code == 200
    assert client.get("/api/admin/check-session").status_code == 401


def test_login_is_rate_limited_per_ip_counting_every_attempt():
    client, _db = _build_client(limit=5)

    statuses = [client.post("/api/admin/login", json={"pin": "0000"}).status_code for _ in range(5)]
    blocked = client.post("/api/admin/login", json={"pin": "1234"})

    assert statuses == [401] * 5
    assert blocked.status_code == 429
    assert blocked.headers.get("retry-after")


def test_successful_logins_also_count_toward_the_limit():
    client, _db = _build_client(limit=2)

    assert client.post("/api/admin/login", json={"pin": "1234"}).status_code == 200
    assert client.post("/api/admin/login", json={"pin": "1234"}).status_code == 200
    assert client.post("/api/admin/login", json={"pin": "1234"}).status_code == 429


def test_session_token_round_trip_and_tampering():
    token = create_admin_session({"admin_id": "admin-1"})

    payload = decode_admin_session(token)

    assert payload["admin_id"] == "admin-1"
    assert decode_admin_session(token + "x") is None
    assert decode_admin_session(create_admin_session({"admin_id": "admin-1", "exp": 1})) is None


def test_require_admin_rejects_missing_and_unknown_sessions():
    missing = _build_request()
    unknown = _build_request(create_admin_session({"admin_id": "someone-else"}))
    db = SimpleNamespace(query=lambda *_: SimpleNamespace(filter=lambda *_: SimpleNamespace(first=lambda: None)))

    with pytest.raises(HTTPException) as exc_missing:
        require_admin(request=missing, db=db)
    with pytest.raises(HTTPException) as exc_unknown:
        require_admin(request=unknown, db=db)

    assert exc_missing.value.status_code == 401
    assert exc_unknown.value.status_code == 401
    assert exc_missing.value.detail == "Sessão expirada, faça login novamente"


def test_bootstrap_is_idempotent_and_can_reset():
    db = build_session()

    first = bootstrap_admin_pin(db, "1234")
    original_hash = first.pin_hash
    again = bootstrap_admin_pin(db, "5678")
    assert again.pin_hash == original_hash

    bootstrap_admin_pin(db, "5678", reset=True)
    assert db.query(AdminUser).one().pin_hash != original_hash
    assert bootstrap_admin_pin(db, "") is None
    with pytest.raises(RuntimeError):
        bootstrap_admin_pin(db, "12")
