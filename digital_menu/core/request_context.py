from __future__ import annotations

from contextvars import ContextVar


_REQUEST_ID_CTX: ContextVar[str | None] = ContextVar("request_id", default=None)
_RESTAURANT_SLUG_CTX: ContextVar[str | None] = ContextVar("restaurant_slug", default=None)


def set_request_context(*, request_id: str | None = None, restaurant_slug: str | None = None) -> None:
    if request_id is not None:
        _REQUEST_ID_CTX.set(request_id)
    if restaurant_slug is not None:
        _RESTAURANT_SLUG_CTX.set(restaurant_slug)


def get_request_id() -> str | None:
    return _REQUEST_ID_CTX.get()


def get_restaurant_slug() -> str | None:
    return _RESTAURANT_SLUG_CTX.get()


def clear_request_context() -> None:
    _REQUEST_ID_CTX.set(None)
    _RESTAURANT_SLUG_CTX.set(None)
