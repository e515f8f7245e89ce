from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from threading import Lock


def status_class(status_code: int) -> str:
    return f"{status_code // 100}xx"


@dataclass
class RouteMetric:
    requests: int = 0
    duration_total_ms: float = 0.0
    duration_max_ms: float = 0.0
    statuses: Counter = field(default_factory=Counter)

    @property
    def errors(self) -> int:
        return self.statuses["4xx"] + self.statuses["5xx"]


class InMemoryRequestMetrics:
    """Contadores por rota, agregados pelo template (``/api/media/{media_id}``)."""

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], RouteMetric] = {}
        self._lock = Lock()

    def observe(self, endpoint: str, method: str, status_code: int, duration_ms: float) -> None:
        with self._lock:
            metric = self._routes.setdefault((method, endpoint), RouteMetric())
            metric.requests += 1
            metric.duration_total_ms += duration_ms
            metric.duration_max_ms = max(metric.duration_max_ms, duration_ms)
            metric.statuses[status_class(status_code)] += 1

    def snapshot(self) -> dict[str, dict]:
        with self._lock:
            return {
                f"{method} {endpoint}": {
                    "total_requests": metric.requests,
                    "total_duration_ms": round(metric.duration_total_ms, 2),
                    "avg_duration_ms": round(metric.duration_total_ms / metric.requests, 2),
                    "max_duration_ms": round(metric.duration_max_ms, 2),
                    "error_count": metric.errors,
                    "status_classes": dict(sorted(metric.statuses.items())),
                }
                for (method, endpoint), metric in sorted(self._routes.items())
            }

    def reset(self) -> None:
        with self._lock:
            self._routes.clear()


request_metrics = InMemoryRequestMetrics()
