"""Sincronização do tema entre o servidor e as páginas abertas.

``ThemeSyncClient`` é o lado da loja: pinta a cor em cache antes de qualquer
rede, depois busca o tema oficial e reaplica. Polling, foco, visibilidade e
o evento ``theme-updated`` apenas disparam ``refresh``; não existe push.

``ThemeEditor`` é o lado do admin: prévia local, salvar e descartar.
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any, Coroutine

import httpx

from digital_menu.core.config import THEME_POLL_INTERVAL_SECONDS, THEME_RETRY_DELAY_SECONDS
from digital_menu.services.client_cache import THEME_CACHE_KEY, ClientCache, MemoryClientCache
from digital_menu.services.color_utils import ColorScheme
from digital_menu.services.document_style import (
    StyleDocument,
    ThemeSnapshot,
    apply_brand_colors,
    apply_cached_background,
    apply_theme_to_document,
    apply_ui_settings,
)
from digital_menu.services.event_bus import (
    THEME_UPDATED_EVENT,
    TYPOGRAPHY_UPDATED_EVENT,
    EventBus,
    event_bus,
)

logger = logging.getLogger(__name__)

THEME_PATH = "/data/theme"
UI_SETTINGS_PATH = "/api/ui-settings"
RESTAURANT_PATH = "/data/restaurant"
ADMIN_THEME_PATH = "/api/admin/theme"

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}
FETCH_ATTEMPTS = 2

SESSION_EXPIRED_MESSAGE = "Sessão expirada, faça login novamente"


class ThemeFetchError(RuntimeError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Erro ao buscar {path}: {detail}")
        self.path = path
        self.detail = detail


class ThemeSaveError(RuntimeError):
    def __init__(self, status_code: int | None, detail: str = ""):
        if status_code == 401:
            message = SESSION_EXPIRED_MESSAGE
        elif status_code is None:
            message = f"Erro de rede ao salvar tema: {detail}"
        else:
            message = f"Erro ao salvar tema ({status_code}): {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def requires_login(self) -> bool:
        return self.status_code == 401


def snapshot_from_payload(payload: Any) -> ThemeSnapshot | None:
    """``{"appBg": ..., "backgroundImageMediaId": ...}`` -> ``ThemeSnapshot``."""
    if not isinstance(payload, dict):
        return None
    app_bg = payload.get("appBg")
    if not isinstance(app_bg, str) or not app_bg.strip():
        return None
    media_id = payload.get("backgroundImageMediaId")
    return ThemeSnapshot(app_bg=app_bg, background_image_media_id=media_id or None)


async def fetch_json(
    client: httpx.AsyncClient,
    path: str,
    *,
    params: dict[str, Any] | None = None,
    attempts: int = FETCH_ATTEMPTS,
    retry_delay: float = THEME_RETRY_DELAY_SECONDS,
) -> dict[str, Any]:
    """GET com uma nova tentativa após ``retry_delay``; levanta ``ThemeFetchError``."""
    last_error: Exception | None = None

    for attempt in range(1, attempts + 1):
        try:
            response = await client.get(path, params=params, headers=NO_CACHE_HEADERS)
            if not 200 <= response.status_code < 300:
                raise ThemeFetchError(path, f"status {response.status_code}")
            data = response.json()
            if not isinstance(data, dict):
                raise ThemeFetchError(path, "resposta não é um objeto JSON")
            return data
        except (httpx.HTTPError, ValueError, ThemeFetchError) as exc:
            last_error = exc
            if attempt < attempts:
                logger.warning(
                    "theme fetch failed, retrying",
                    extra={"path": path, "attempt": attempt, "error": str(exc)},
                )
                await asyncio.sleep(retry_delay)
                continue

    if isinstance(last_error, ThemeFetchError):
        raise last_error
    raise ThemeFetchError(path, str(last_error))


class ThemeSyncClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        document: StyleDocument | None,
        *,
        cache: ClientCache | None = None,
        events: EventBus | None = None,
        restaurant_slug: str | None = None,
        poll_interval: float = THEME_POLL_INTERVAL_SECONDS,
        retry_delay: float = THEME_RETRY_DELAY_SECONDS,
    ) -> None:
        self.http = http
        self.document = document
        self.cache = cache if cache is not None else MemoryClientCache()
        self.events = events if events is not None else event_bus
        self.restaurant_slug = restaurant_slug
        self.poll_interval = poll_interval
        self.retry_delay = retry_delay

        self.applied_theme: ThemeSnapshot | None = None
        self.visible = True
        self._poll_task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()
        self._subscribed = False

    def apply_cached(self) -> bool:
        """Aplica a cor salva localmente, sem rede. Devolve ``False`` sem cache."""
        cached = self.cache.get(THEME_CACHE_KEY)
        if not cached:
            return False
        apply_cached_background(self.document, cached)
        self.applied_theme = ThemeSnapshot(app_bg=cached)
        return True

    async def mount(self) -> None:
        self.apply_cached()
        self._subscribe()
        await self.refresh_all()

    async def refresh(self) -> ThemeSnapshot | None:
        """Busca o tema oficial e reaplica se mudou. Falhas só são logadas."""
        try:
            data = await fetch_json(self.http, THEME_PATH, retry_delay=self.retry_delay)
        except ThemeFetchError:
            logger.exception("theme refresh failed", extra={"path": THEME_PATH})
            return None

        snapshot = snapshot_from_payload(data.get("theme"))
        if snapshot is None:
            logger.warning("theme payload without appBg", extra={"path": THEME_PATH})
            return None

        self.cache.set(THEME_CACHE_KEY, snapshot.app_bg)
        if snapshot != self.applied_theme:
            apply_theme_to_document(self.document, snapshot)
            self.applied_theme = snapshot
            logger.info("theme applied", extra={"app_bg": snapshot.app_bg})
        return snapshot

    async def refresh_ui_settings(self) -> dict[str, Any] | None:
        try:
            data = await fetch_json(self.http, UI_SETTINGS_PATH, retry_delay=self.retry_delay)
        except ThemeFetchError:
            logger.exception("ui settings refresh failed", extra={"path": UI_SETTINGS_PATH})
            return None
        apply_ui_settings(self.document, data)
        return data

    async def refresh_brand_colors(self) -> dict[str, Any] | None:
        if not self.restaurant_slug:
            return None
        try:
            data = await fetch_json(
                self.http,
                RESTAURANT_PATH,
                params={"slug": self.restaurant_slug},
                retry_delay=self.retry_delay,
            )
        except ThemeFetchError:
            logger.exception("brand colors refresh failed", extra={"slug": self.restaurant_slug})
            return None
        brand_colors = data.get("brandColors")
        if isinstance(brand_colors, dict):
            apply_brand_colors(self.document, brand_colors)
            return brand_colors
        return None

    async def refresh_all(self) -> None:
        # Cada busca é independente; uma falha não bloqueia as outras.
        await asyncio.gather(
            self.refresh(),
            self.refresh_ui_settings(),
            self.refresh_brand_colors(),
        )

    def on_visibility_change(self, visible: bool) -> asyncio.Task | None:
        self.visible = visible
        if visible:
            return self._schedule(self.refresh())
        return None

    def on_focus(self) -> asyncio.Task | None:
        return self._schedule(self.refresh())

    def _on_theme_updated(self, payload: dict[str, Any]) -> None:
        self._schedule(self.refresh())

    def _on_typography_updated(self, payload: dict[str, Any]) -> None:
        self._schedule(self.refresh_ui_settings())

    def _subscribe(self) -> None:
        if self._subscribed:
            return
        self.events.subscribe(THEME_UPDATED_EVENT, self._on_theme_updated)
        self.events.subscribe(TYPOGRAPHY_UPDATED_EVENT, self._on_typography_updated)
        self._subscribed = True

    def _unsubscribe(self) -> None:
        if not self._subscribed:
            return
        self.events.unsubscribe(THEME_UPDATED_EVENT, self._on_theme_updated)
        self.events.unsubscribe(TYPOGRAPHY_UPDATED_EVENT, self._on_typography_updated)
        self._subscribed = False

    def _schedule(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            logger.warning("theme refresh requested outside event loop")
            return None
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            if self.visible:
                await self.refresh()

    def start_polling(self) -> asyncio.Task:
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self._poll_loop())
        return self._poll_task

    async def wait_pending(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def stop(self) -> None:
        self._unsubscribe()
        task = self._poll_task
        self._poll_task = None
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task


_UNSET: Any = object()


class ThemeEditor:
    """Editor de tema do admin. A prévia nunca sai do documento atual."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        document: StyleDocument | None,
        *,
        cache: ClientCache | None = None,
        events: EventBus | None = None,
    ) -> None:
        self.http = http
        self.document = document
        self.cache = cache if cache is not None else MemoryClientCache()
        self.events = events if events is not None else event_bus
        self.saved: ThemeSnapshot | None = None
        self.draft: ThemeSnapshot | None = None

    @property
    def is_dirty(self) -> bool:
        return self.draft is not None and self.draft != self.saved

    async def load(self) -> ThemeSnapshot:
        response = await self.http.get(ADMIN_THEME_PATH, headers=NO_CACHE_HEADERS)
        if response.status_code == 401:
            raise ThemeFetchError(ADMIN_THEME_PATH, SESSION_EXPIRED_MESSAGE)
        if not 200 <= response.status_code < 300:
            raise ThemeFetchError(ADMIN_THEME_PATH, f"status {response.status_code}")

        body = response.json()
        snapshot = snapshot_from_payload(body.get("theme") if isinstance(body, dict) else None)
        if snapshot is None:
            raise ThemeFetchError(ADMIN_THEME_PATH, "tema sem appBg")

        self.saved = snapshot
        self.draft = snapshot
        apply_theme_to_document(self.document, snapshot)
        return snapshot

    def preview(
        self,
        *,
        app_bg: str | None = None,
        background_image_media_id: str | None = _UNSET,
    ) -> ColorScheme | None:
        base = self.draft or self.saved or ThemeSnapshot(app_bg="")
        self.draft = ThemeSnapshot(
            app_bg=app_bg if app_bg is not None else base.app_bg,
            background_image_media_id=(
                base.background_image_media_id
                if background_image_media_id is _UNSET
                else background_image_media_id
            ),
        )
        if not self.draft.app_bg:
            return None
        return apply_theme_to_document(self.document, self.draft)

    async def save(self) -> ThemeSnapshot:
        """Persiste o rascunho. Só depois do sucesso atualiza cache e avisa a página."""
        draft = self.draft
        if draft is None or not draft.app_bg.strip():
            raise ThemeSaveError(422, "appBg é obrigatório")

        payload = {
            "appBg": draft.app_bg,
            "backgroundImageMediaId": draft.background_image_media_id,
        }
        try:
            response = await self.http.put(ADMIN_THEME_PATH, json=payload)
        except httpx.HTTPError as exc:
            logger.error("theme save failed", extra={"error": str(exc)})
            raise ThemeSaveError(None, str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("theme save rejected", extra={"status_code": response.status_code})
            raise ThemeSaveError(response.status_code, response.text)

        body = response.json()
        snapshot = snapshot_from_payload(body.get("theme") if isinstance(body, dict) else None) or draft

        self.saved = snapshot
        self.draft = snapshot
        apply_theme_to_document(self.document, snapshot)
        self.cache.set(THEME_CACHE_KEY, snapshot.app_bg)
        self.events.emit(THEME_UPDATED_EVENT, {"appBg": snapshot.app_bg})
        logger.info("theme saved", extra={"app_bg": snapshot.app_bg})
        return snapshot

    def discard(self) -> None:
        """Volta o documento para o último tema salvo."""
        self.draft = self.saved
        if self.saved is not None:
            apply_theme_to_document(self.document, self.saved)
