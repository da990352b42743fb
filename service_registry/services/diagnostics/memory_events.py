from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from service_registry.services.diagnostics.interface import RegistryEventsInterface


@dataclass
class RegistryEvent:
    name: str
    payload: dict[str, Any] = field(default_factory=dict)


class MemoryRegistryEvents(RegistryEventsInterface):
    """Records registry events for test assertions."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.events: list[RegistryEvent] = []
        self.closed = False

    def binding_set(self, abstract_type: str, concrete_type: str) -> None:
        self._record("binding_set", abstract_type=abstract_type, concrete_type=concrete_type)

    def singleton_binding_set(self, abstract_type: str, concrete_type: str) -> None:
        self._record(
            "singleton_binding_set", abstract_type=abstract_type, concrete_type=concrete_type
        )

    def binding_cleared(self, abstract_type: str) -> None:
        self._record("binding_cleared", abstract_type=abstract_type)

    def bindings_cleared(self, count: int) -> None:
        self._record("bindings_cleared", count=count)

    def binding_not_found(self, abstract_type: str) -> None:
        self._record("binding_not_found", abstract_type=abstract_type)

    def invalid_configuration_fragment(self, reason: str) -> None:
        self._record("invalid_configuration_fragment", reason=reason)

    def initializing(self) -> None:
        self._record("initializing")

    def close(self) -> None:
        self.closed = True

    @property
    def names(self) -> list[str]:
        """Convenience: return just the event names, in order."""
        with self._lock:
            return [e.name for e in self.events]

    def of(self, name: str) -> list[RegistryEvent]:
        with self._lock:
            return [e for e in self.events if e.name == name]

    def _record(self, name: str, **payload: Any) -> None:
        with self._lock:
            self.events.append(RegistryEvent(name, payload))
