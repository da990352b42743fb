from service_registry.services.metrics.interface import MetricsInterface


class NoopMetrics(MetricsInterface):
    """Discards all metrics. Default when no metrics backend is selected."""

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass
