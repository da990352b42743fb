"""Central registry mapping (concern, impl_name) to concrete class paths.

Uses string paths for lazy imports; importing the registry doesn't pull in
prometheus_client unless that implementation is selected.
"""

from typing import Any

from service_registry.config.type_resolver import resolve_class

REGISTRY: dict[str, dict[str, str]] = {
    "metrics": {
        "noop": "service_registry.services.metrics.noop_metrics.NoopMetrics",
        "memory": "service_registry.services.metrics.memory_metrics.MemoryMetrics",
        "prometheus": "service_registry.services.metrics.prometheus_metrics.PrometheusMetrics",
    },
    "events": {
        "logging": "service_registry.services.diagnostics.logging_events.LoggingRegistryEvents",
        "memory": "service_registry.services.diagnostics.memory_events.MemoryRegistryEvents",
        "noop": "service_registry.services.diagnostics.noop_events.NoopRegistryEvents",
    },
}


def available(concern: str) -> list[str]:
    return list(REGISTRY.get(concern, {}))


def resolve_implementation(concern: str, impl_name: str) -> type[Any]:
    """Look up the concrete class for a given concern and implementation name."""
    impls = REGISTRY.get(concern)
    if impls is None:
        raise ValueError(f"Unknown concern: {concern}")
    dotted = impls.get(impl_name)
    if dotted is None:
        raise ValueError(
            f"Unknown implementation '{impl_name}' for {concern} "
            f"(available: {', '.join(impls)})"
        )
    return resolve_class(dotted)
