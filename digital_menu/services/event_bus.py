from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Optional

# Evento disparado pelo editor de tema logo após salvar com sucesso.
THEME_UPDATED_EVENT = "theme-updated"
TYPOGRAPHY_UPDATED_EVENT = "typography-updated"

Handler = Callable[[dict[str, Any]], None]


class EventBus:
    """Eventos da mesma página (equivalente ao ``window.dispatchEvent``)."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)
        self._logger = logging.getLogger(__name__)

    def emit(self, event_name: str, payload: Optional[dict[str, Any]] = None) -> None:
        handlers = list(self._handlers.get(event_name, []))
        if not handlers:
            self._logger.debug("EventBus: no handlers for %s", event_name)
            return
        for handler in handlers:
            try:
                handler(payload or {})
            except Exception:
                self._logger.exception("EventBus handler failed for %s", event_name)

    def subscribe(self, event_name: str, handler: Handler) -> Handler:
        self._handlers[event_name].append(handler)
        return handler

    def unsubscribe(self, event_name: str, handler: Handler) -> None:
        handlers = self._handlers.get(event_name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))


event_bus = EventBus()
