from service_registry.services.diagnostics.interface import RegistryEventsInterface


class NoopRegistryEvents(RegistryEventsInterface):
    """Discards all registry events."""

    def binding_set(self, abstract_type: str, concrete_type: str) -> None:
        pass

    def singleton_binding_set(self, abstract_type: str, concrete_type: str) -> None:
        pass

    def binding_cleared(self, abstract_type: str) -> None:
        pass

    def bindings_cleared(self, count: int) -> None:
        pass

    def binding_not_found(self, abstract_type: str) -> None:
        pass

    def invalid_configuration_fragment(self, reason: str) -> None:
        pass

    def initializing(self) -> None:
        pass
