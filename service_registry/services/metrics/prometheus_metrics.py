"""Prometheus metrics implementation using prometheus_client."""

from __future__ import annotations

import threading
from typing import Any

from service_registry.services.metrics.interface import MetricsInterface


def _label_names(tags: dict[str, str] | None) -> list[str]:
    return sorted(tags.keys()) if tags else []


def _label_values(names: list[str], tags: dict[str, str] | None) -> list[str]:
    if not tags:
        return []
    return [tags[n] for n in names]


class PrometheusMetrics(MetricsInterface):
    """Metrics backend that exposes registry metrics to Prometheus.

    ``port`` starts the prometheus_client HTTP exporter when non-zero.
    ``registry`` defaults to prometheus_client's global ``REGISTRY``; pass a
    fresh ``CollectorRegistry`` to keep instances isolated (tests do).

    Metric names have dashes and dots replaced with underscores to comply with
    Prometheus naming conventions.
    """

    def __init__(self, port: int = 0, registry: Any = None) -> None:
        import prometheus_client as prom

        self._prom = prom
        self._registry = registry if registry is not None else prom.REGISTRY
        self._lock = threading.Lock()
        self._counters: dict[str, prom.Counter] = {}
        self._gauges: dict[str, prom.Gauge] = {}
        self._histograms: dict[str, prom.Histogram] = {}

        if port:
            prom.start_http_server(port, registry=self._registry)

    @staticmethod
    def _sanitize(name: str) -> str:
        return name.replace("-", "_").replace(".", "_")

    def _metric(self, cache: dict[str, Any], factory: Any, name: str, label_names: list[str]) -> Any:
        safe = self._sanitize(name)
        key = f"{safe}:{','.join(label_names)}"
        with self._lock:
            if key not in cache:
                cache[key] = factory(safe, safe, label_names, registry=self._registry)
            return cache[key]

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        label_names = _label_names(tags)
        c = self._metric(self._counters, self._prom.Counter, name, label_names)
        if label_names:
            c.labels(*_label_values(label_names, tags)).inc(value)
        else:
            c.inc(value)

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        label_names = _label_names(tags)
        g = self._metric(self._gauges, self._prom.Gauge, name, label_names)
        if label_names:
            g.labels(*_label_values(label_names, tags)).set(value)
        else:
            g.set(value)

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        label_names = _label_names(tags)
        h = self._metric(self._histograms, self._prom.Histogram, name, label_names)
        if label_names:
            h.labels(*_label_values(label_names, tags)).observe(value)
        else:
            h.observe(value)
