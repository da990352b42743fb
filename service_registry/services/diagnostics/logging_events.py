"""Registry events rendered as log lines and metrics."""

from __future__ import annotations

from service_registry.services.diagnostics.interface import RegistryEventsInterface
from service_registry.services.logger.interface import LoggingInterface
from service_registry.services.metrics.interface import MetricsInterface
from service_registry.services.metrics.noop_metrics import NoopMetrics

_PREFIX = "service_registry"


class LoggingRegistryEvents(RegistryEventsInterface):
    """Logs each registry event and counts it in ``metrics``.

    Lookups that miss are warnings; every other event is informational.
    Events arriving after :meth:`close` are dropped.
    """

    def __init__(self, logger: LoggingInterface, metrics: MetricsInterface | None = None) -> None:
        self._log = logger
        self._metrics = metrics or NoopMetrics()
        self._closed = False

    def binding_set(self, abstract_type: str, concrete_type: str) -> None:
        if self._closed:
            return
        self._log.info(
            f"Binding '{abstract_type}' to '{concrete_type}'",
            abstract_type=abstract_type,
            concrete_type=concrete_type,
        )
        self._metrics.counter(f"{_PREFIX}.bindings_set", tags={"mode": "factory"})

    def singleton_binding_set(self, abstract_type: str, concrete_type: str) -> None:
        if self._closed:
            return
        self._log.info(
            f"Binding '{abstract_type}' to a singleton instance of '{concrete_type}'",
            abstract_type=abstract_type,
            concrete_type=concrete_type,
        )
        self._metrics.counter(f"{_PREFIX}.bindings_set", tags={"mode": "singleton"})

    def binding_cleared(self, abstract_type: str) -> None:
        if self._closed:
            return
        self._log.info(f"Clearing binding for '{abstract_type}'.", abstract_type=abstract_type)
        self._metrics.counter(f"{_PREFIX}.bindings_cleared")

    def bindings_cleared(self, count: int) -> None:
        if self._closed:
            return
        self._log.info(f"Clearing {count} binding(s)", count=count)
        self._metrics.counter(f"{_PREFIX}.bindings_cleared", value=count)
        self._metrics.gauge(f"{_PREFIX}.last_clear_count", count)

    def binding_not_found(self, abstract_type: str) -> None:
        if self._closed:
            return
        self._log.warn(
            f"Cannot find a binding for requested abstract type '{abstract_type}'.",
            abstract_type=abstract_type,
        )
        self._metrics.counter(f"{_PREFIX}.binding_not_found")

    def invalid_configuration_fragment(self, reason: str) -> None:
        if self._closed:
            return
        self._log.warn("The specified configuration fragment is invalid", reason=reason)
        self._metrics.counter(f"{_PREFIX}.invalid_configuration")

    def initializing(self) -> None:
        if self._closed:
            return
        self._log.info("Initializing service registry from XML configuration")

    def close(self) -> None:
        self._closed = True
