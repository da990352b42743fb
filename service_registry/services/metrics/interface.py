from __future__ import annotations

from abc import ABC, abstractmethod


class MetricsInterface(ABC):
    """Metrics sink for counters, gauges, and histograms.

    ``tags`` become labels; backends keep each distinct tag set as its own
    series. Names may contain dots, which label-strict backends rewrite.
    """

    @abstractmethod
    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        """Add ``value`` to a monotonically increasing count."""

    @abstractmethod
    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Record the current ``value``, replacing the previous one."""

    @abstractmethod
    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Record one observation in a distribution."""
