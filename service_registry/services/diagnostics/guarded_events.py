from __future__ import annotations

from service_registry.services.diagnostics.interface import RegistryEventsInterface


class GuardedRegistryEvents(RegistryEventsInterface):
    """Forwards to another sink and drops anything it raises.

    Diagnostics are fire-and-forget: a broken sink must never change the
    outcome of a registry operation.
    """

    def __init__(self, inner: RegistryEventsInterface) -> None:
        self._inner = inner

    @property
    def inner(self) -> RegistryEventsInterface:
        return self._inner

    def binding_set(self, abstract_type: str, concrete_type: str) -> None:
        try:
            self._inner.binding_set(abstract_type, concrete_type)
        except Exception:
            pass

    def singleton_binding_set(self, abstract_type: str, concrete_type: str) -> None:
        try:
            self._inner.singleton_binding_set(abstract_type, concrete_type)
        except Exception:
            pass

    def binding_cleared(self, abstract_type: str) -> None:
        try:
            self._inner.binding_cleared(abstract_type)
        except Exception:
            pass

    def bindings_cleared(self, count: int) -> None:
        try:
            self._inner.bindings_cleared(count)
        except Exception:
            pass

    def binding_not_found(self, abstract_type: str) -> None:
        try:
            self._inner.binding_not_found(abstract_type)
        except Exception:
            pass

    def invalid_configuration_fragment(self, reason: str) -> None:
        try:
            self._inner.invalid_configuration_fragment(reason)
        except Exception:
            pass

    def initializing(self) -> None:
        try:
            self._inner.initializing()
        except Exception:
            pass

    def close(self) -> None:
        try:
            self._inner.close()
        except Exception:
            pass
