from __future__ import annotations

import threading

from service_registry.services.metrics.interface import MetricsInterface


def _key(name: str, tags: dict[str, str] | None) -> str:
    if not tags:
        return name
    labels = ",".join(f"{k}={tags[k]}" for k in sorted(tags))
    return f"{name}{{{labels}}}"


class MemoryMetrics(MetricsInterface):
    """In-memory metrics for test assertions on metric values.

    Tagged samples are stored under ``name{k=v,...}`` with keys sorted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.counters: dict[str, float] = {}
        self.gauges: dict[str, float] = {}
        self.histograms: dict[str, list[float]] = {}

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        key = _key(name, tags)
        with self._lock:
            self.counters[key] = self.counters.get(key, 0) + value

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        with self._lock:
            self.gauges[_key(name, tags)] = value

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        with self._lock:
            self.histograms.setdefault(_key(name, tags), []).append(value)
