"""Wire logger, metrics and diagnostics into a ready-to-use registry."""

from __future__ import annotations

from service_registry.config.loader import load_configuration
from service_registry.config.settings import RegistrySettings
from service_registry.config.type_resolver import TypeResolver, resolve_class
from service_registry.core.binding_table import ServiceRegistry
from service_registry.services.diagnostics.interface import RegistryEventsInterface
from service_registry.services.logger.factory import LoggerFactory
from service_registry.services.metrics.interface import MetricsInterface
from service_registry.services.registry import resolve_implementation

COMPONENT = "service_registry"


def build_metrics(settings: RegistrySettings) -> MetricsInterface:
    impl_cls = resolve_implementation("metrics", settings.metrics_impl)
    if settings.metrics_impl == "prometheus":
        return impl_cls(port=settings.prometheus_port)
    return impl_cls()


def build_events(
    settings: RegistrySettings, logger_factory: LoggerFactory, metrics: MetricsInterface
) -> RegistryEventsInterface:
    impl_cls = resolve_implementation("events", settings.events_impl)
    if settings.events_impl == "logging":
        return impl_cls(logger_factory.for_component(COMPONENT), metrics)
    return impl_cls()


def build_registry(
    settings: RegistrySettings | None = None,
    logger_factory: LoggerFactory | None = None,
    metrics: MetricsInterface | None = None,
    resolver: TypeResolver = resolve_class,
) -> ServiceRegistry:
    """Create a registry reporting through the configured diagnostics sink.

    When ``SERVICE_REGISTRY_CONFIG`` is set, the XML file it names is loaded.
    """
    settings = settings or RegistrySettings()
    logger_factory = logger_factory or LoggerFactory(default_impl=settings.log_impl)
    metrics = metrics or build_metrics(settings)

    registry = ServiceRegistry(build_events(settings, logger_factory, metrics))

    if settings.config_path:
        try:
            load_configuration(registry, settings.config_path, resolver)
        except Exception:
            registry.close()
            raise
    return registry
