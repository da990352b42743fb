from __future__ import annotations

import os


class RegistrySettings:
    """Environment-based registry settings with optional overrides.

    Keys:
        SERVICE_REGISTRY_CONFIG  - path of an XML configuration to load at startup
        LOG_IMPL                 - logger implementation (default: pretty)
        METRICS_IMPL             - metrics implementation (default: noop)
        EVENTS_IMPL              - diagnostics sink: logging, memory, noop (default: logging)
        METRICS_PROMETHEUS_PORT  - Prometheus exporter port, 0 disables (default: 0)
    """

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        self._env = dict(os.environ)
        if overrides:
            self._env.update(overrides)

    def get(self, key: str, default: str = "") -> str:
        return self._env.get(key, default)

    @property
    def config_path(self) -> str | None:
        return self._env.get("SERVICE_REGISTRY_CONFIG") or None

    @property
    def log_impl(self) -> str:
        return self._env.get("LOG_IMPL") or "pretty"

    @property
    def events_impl(self) -> str:
        return self._env.get("EVENTS_IMPL") or "logging"

    @property
    def metrics_impl(self) -> str:
        return self._env.get("METRICS_IMPL") or "noop"

    @property
    def prometheus_port(self) -> int:
        raw = self._env.get("METRICS_PROMETHEUS_PORT", "").strip()
        if not raw:
            return 0
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"METRICS_PROMETHEUS_PORT must be an integer, got '{raw}'") from exc

    def __repr__(self) -> str:
        return (
            f"RegistrySettings(config_path={self.config_path!r}, "
            f"log_impl={self.log_impl!r}, metrics_impl={self.metrics_impl!r}, "
            f"events_impl={self.events_impl!r})"
        )
