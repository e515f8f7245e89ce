from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock

logger = logging.getLogger(__name__)

# Guarda só a string crua da cor de fundo, nunca o tema inteiro nem a paleta.
THEME_CACHE_KEY = "theme-appBg"


class ClientCache(ABC):
    """Cache chave/valor durável do lado do cliente (como o localStorage).

    É só otimização contra flash de cores padrão; a resposta do servidor
    sempre prevalece.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryClientCache(ClientCache):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class JsonFileClientCache(ClientCache):
    """Cache persistido em um arquivo JSON; sobrevive a reinícios do processo.

    Falhas de leitura/escrita são logadas e ignoradas.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = Lock()

    def _load(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            logger.warning("client cache unreadable path=%s", self.path, exc_info=True)
            return {}

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("client cache corrupted path=%s", self.path)
            return {}

        if not isinstance(parsed, dict):
            return {}
        return {key: value for key, value in parsed.items() if isinstance(value, str)}

    def _store(self, values: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")
        except OSError:
            logger.warning("client cache not writable path=%s", self.path, exc_info=True)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            values = self._load()
            values[key] = value
            self._store(values)

    def remove(self, key: str) -> None:
        with self._lock:
            values = self._load()
            if values.pop(key, None) is not None:
                self._store(values)
