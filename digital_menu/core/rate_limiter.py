from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from threading import Lock

from digital_menu.core.config import LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_SECONDS


@dataclass
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int


class RateLimiterService(ABC):
    @abstractmethod
    def check(self, *, key: str) -> RateLimitDecision:
        """Registra uma tentativa para a chave e diz se ela pode prosseguir."""

    @abstractmethod
    def reset(self, key: str | None = None) -> None:
        """Limpa o histórico de uma chave (ou de todas)."""


class InMemoryRateLimiterService(RateLimiterService):
    """Janela deslizante em memória, por chave (IP do cliente no login).

    Toda tentativa conta, com ou sem sucesso.
    """

    def __init__(self, *, limit: int, window_seconds: int) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._store: dict[str, deque[float]] = {}
        self._lock = Lock()

    def check(self, *, key: str) -> RateLimitDecision:
        now = time.monotonic()

        with self._lock:
            bucket = self._store.setdefault(key, deque())
            cutoff = now - self.window_seconds
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.limit:
                retry_after = max(1, int(self.window_seconds - (now - bucket[0])))
                return RateLimitDecision(
                    allowed=False,
                    limit=self.limit,
                    remaining=0,
                    retry_after_seconds=retry_after,
                )

            bucket.append(now)
            return RateLimitDecision(
                allowed=True,
                limit=self.limit,
                remaining=max(0, self.limit - len(bucket)),
                retry_after_seconds=0,
            )

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._store.clear()
            else:
                self._store.pop(key, None)


login_rate_limiter = InMemoryRateLimiterService(limit=LOGIN_MAX_ATTEMPTS, window_seconds=LOGIN_WINDOW_SECONDS)
