from __future__ import annotations

from service_registry.services.logger.interface import LoggingInterface
from service_registry.services.logger.memory_logger import MemoryLogger
from service_registry.services.logger.pretty_logger import PrettyLogger


class LoggerFactory:
    """Factory that creates and caches logger instances by implementation name.

    Loggers handed out by :meth:`for_component` share the cached instance, so a
    memory logger collects the entries of every component that uses it.
    """

    _registry: dict[str, type[LoggingInterface]] = {
        "pretty": PrettyLogger,
        "memory": MemoryLogger,
    }

    def __init__(self, default_impl: str = "pretty") -> None:
        if default_impl not in self._registry:
            raise ValueError(
                f"Unknown logger implementation: '{default_impl}' "
                f"(available: {', '.join(self._registry)})"
            )
        self._default_impl = default_impl
        self._instances: dict[str, LoggingInterface] = {}

    @property
    def default_impl(self) -> str:
        return self._default_impl

    def create(self, impl_name: str | None = None) -> LoggingInterface:
        """Return a logger instance, creating one if not yet cached."""
        name = impl_name or self._default_impl
        if name not in self._instances:
            cls = self._registry.get(name)
            if cls is None:
                raise ValueError(
                    f"Unknown logger implementation: '{name}' "
                    f"(available: {', '.join(self._registry)})"
                )
            self._instances[name] = cls()
        return self._instances[name]

    def for_component(self, component: str, impl_name: str | None = None) -> LoggingInterface:
        return self.create(impl_name).with_context(component=component)
