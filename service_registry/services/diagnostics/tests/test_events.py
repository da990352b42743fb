import pytest

from service_registry.services.diagnostics.guarded_events import GuardedRegistryEvents
from service_registry.services.diagnostics.interface import RegistryEventsInterface
from service_registry.services.diagnostics.logging_events import LoggingRegistryEvents
from service_registry.services.diagnostics.memory_events import MemoryRegistryEvents
from service_registry.services.logger.memory_logger import MemoryLogger
from service_registry.services.metrics.memory_metrics import MemoryMetrics


def _emit_all(sink: RegistryEventsInterface) -> None:
    sink.initializing()
    sink.binding_set("Repo", "SqlRepo")
    sink.singleton_binding_set("Clock", "SystemClock")
    sink.binding_cleared("Repo")
    sink.bindings_cleared(3)
    sink.binding_not_found("Cache")
    sink.invalid_configuration_fragment("root element is 'foo'")


def test_memory_events_record_in_order():
    sink = MemoryRegistryEvents()
    _emit_all(sink)
    assert sink.names == [
        "initializing",
        "binding_set",
        "singleton_binding_set",
        "binding_cleared",
        "bindings_cleared",
        "binding_not_found",
        "invalid_configuration_fragment",
    ]
    assert sink.of("binding_set")[0].payload == {"abstract_type": "Repo", "concrete_type": "SqlRepo"}


def test_logging_events_log_and_count():
    log = MemoryLogger()
    metrics = MemoryMetrics()
    _emit_all(LoggingRegistryEvents(log, metrics))

    assert log.messages == [
        "Initializing service registry from XML configuration",
        "Binding 'Repo' to 'SqlRepo'",
        "Binding 'Clock' to a singleton instance of 'SystemClock'",
        "Clearing binding for 'Repo'.",
        "Clearing 3 binding(s)",
        "Cannot find a binding for requested abstract type 'Cache'.",
        "The specified configuration fragment is invalid",
    ]
    assert [e.msg for e in log.at_level("WARN")] == log.messages[-2:]
    assert metrics.counters == {
        "service_registry.bindings_set{mode=factory}": 1,
        "service_registry.bindings_set{mode=singleton}": 1,
        "service_registry.bindings_cleared": 4,
        "service_registry.binding_not_found": 1,
        "service_registry.invalid_configuration": 1,
    }
    assert metrics.gauges == {"service_registry.last_clear_count": 3}


def test_logging_events_drop_after_close():
    log = MemoryLogger()
    sink = LoggingRegistryEvents(log)
    sink.close()
    _emit_all(sink)
    assert log.entries == []


class _Exploding(MemoryRegistryEvents):
    def __getattribute__(self, name: str):
        if name in RegistryEventsInterface.__abstractmethods__ or name == "close":
            raise RuntimeError(f"{name} failed")
        return super().__getattribute__(name)


def test_guarded_events_swallow_sink_failures():
    guarded = GuardedRegistryEvents(_Exploding())
    _emit_all(guarded)
    guarded.close()


def test_guarded_events_forward_calls():
    inner = MemoryRegistryEvents()
    guarded = GuardedRegistryEvents(inner)
    _emit_all(guarded)
    guarded.close()
    assert guarded.inner is inner
    assert len(inner.events) == 7
    assert inner.closed


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        RegistryEventsInterface()  # type: ignore[abstract]
