from __future__ import annotations

from abc import ABC, abstractmethod


class RegistryEventsInterface(ABC):
    """Write-only diagnostics sink the registry reports to.

    Called synchronously on the caller's thread, never while a registry lock
    is held. Type arguments arrive as display names.
    """

    @abstractmethod
    def binding_set(self, abstract_type: str, concrete_type: str) -> None: ...

    @abstractmethod
    def singleton_binding_set(self, abstract_type: str, concrete_type: str) -> None: ...

    @abstractmethod
    def binding_cleared(self, abstract_type: str) -> None: ...

    @abstractmethod
    def bindings_cleared(self, count: int) -> None: ...

    @abstractmethod
    def binding_not_found(self, abstract_type: str) -> None: ...

    @abstractmethod
    def invalid_configuration_fragment(self, reason: str) -> None: ...

    @abstractmethod
    def initializing(self) -> None: ...

    def close(self) -> None:
        """Release resources held by the sink. Override as needed."""
