import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from service_registry.config.loader import load_configuration, parse_configuration, reset
from service_registry.config.type_resolver import mapping_resolver
from service_registry.core.binding_table import ServiceRegistry
from service_registry.core.errors import (
    ConfigurationError,
    NoMatchingConstructorError,
    TypeLookupError,
    TypeMismatchError,
)
from service_registry.demo.filesystem import Clock, DirectoryHandle, DirectoryHandleImpl, SystemClock
from service_registry.services.diagnostics.memory_events import MemoryRegistryEvents

DEMO_CONFIG = Path(__file__).resolve().parents[2] / "demo" / "config.xml"


class Cache:
    pass


class MemoryCache(Cache):
    instances = 0

    def __init__(self) -> None:
        MemoryCache.instances += 1


class NeedsArgs(Cache):
    def __init__(self, size: int) -> None:
        self.size = size


RESOLVER = mapping_resolver(
    {
        "Cache": Cache,
        "MemoryCache": MemoryCache,
        "NeedsArgs": NeedsArgs,
        "Clock": Clock,
    }
)


def _doc(*directives: str) -> str:
    return "<serviceRegistry><bindings>" + "".join(directives) + "</bindings></serviceRegistry>"


def test_demo_configuration(registry: ServiceRegistry, events: MemoryRegistryEvents):
    load_configuration(registry, DEMO_CONFIG)
    assert registry.snapshot_bindings() == {
        DirectoryHandle: DirectoryHandleImpl,
        Clock: SystemClock,
    }
    assert registry.get(Clock) is registry.get(Clock)
    assert registry.get(DirectoryHandle, "/var").path == "/var"
    assert events.names[0] == "initializing"


def test_factory_directive(registry: ServiceRegistry):
    load_configuration(registry, _doc('<add abstract="Cache" concrete="MemoryCache" />'), RESOLVER)
    assert registry.get(Cache) is not registry.get(Cache)


@pytest.mark.parametrize("flag", ["true", "True", " TRUE "])
def test_singleton_directive(registry: ServiceRegistry, flag: str):
    before = MemoryCache.instances
    load_configuration(
        registry,
        _doc(f'<add abstract="Cache" concrete="MemoryCache" isSingleton="{flag}" />'),
        RESOLVER,
    )
    assert MemoryCache.instances == before + 1
    assert registry.get(Cache) is registry.get(Cache)


def test_explicit_false_is_factory(registry: ServiceRegistry):
    load_configuration(
        registry, _doc('<add abstract="Cache" concrete="MemoryCache" isSingleton="false" />'), RESOLVER
    )
    assert registry.get(Cache) is not registry.get(Cache)


def test_clear_directive_runs_in_document_order(registry: ServiceRegistry, events: MemoryRegistryEvents):
    registry.bind(Clock, SystemClock)
    load_configuration(
        registry,
        _doc('<add abstract="Cache" concrete="MemoryCache" />', "<clear />", '<add abstract="Cache" concrete="NeedsArgs" />'),
        RESOLVER,
    )
    assert registry.snapshot_bindings() == {Cache: NeedsArgs}
    assert events.of("bindings_cleared")[0].payload == {"count": 2}


def test_directive_names_are_case_insensitive(registry: ServiceRegistry):
    registry.bind(Clock, SystemClock)
    load_configuration(registry, _doc("<Clear />", '<ADD abstract="Cache" concrete="MemoryCache" />'), RESOLVER)
    assert registry.snapshot_bindings() == {Cache: MemoryCache}


def test_namespaced_document(registry: ServiceRegistry):
    doc = (
        '<r:serviceRegistry xmlns:r="urn:registry"><r:bindings>'
        '<r:add abstract="Cache" concrete="MemoryCache" />'
        "</r:bindings></r:serviceRegistry>"
    )
    load_configuration(registry, doc, RESOLVER)
    assert Cache in registry


def test_accepts_parsed_element(registry: ServiceRegistry):
    element = ET.fromstring(_doc('<add abstract="Cache" concrete="MemoryCache" />'))
    load_configuration(registry, element, RESOLVER)
    assert Cache in registry


def test_missing_bindings_section_is_empty(registry: ServiceRegistry):
    load_configuration(registry, "<serviceRegistry />", RESOLVER)
    assert len(registry) == 0


def test_wrong_root_element(registry: ServiceRegistry, events: MemoryRegistryEvents):
    with pytest.raises(ConfigurationError, match="must be an element named serviceRegistry"):
        load_configuration(registry, "<registry><bindings /></registry>", RESOLVER)
    assert events.names == ["initializing", "invalid_configuration_fragment"]


def test_none_configuration(registry: ServiceRegistry, events: MemoryRegistryEvents):
    with pytest.raises(ConfigurationError):
        load_configuration(registry, None, RESOLVER)
    assert "invalid_configuration_fragment" in events.names


def test_malformed_xml(registry: ServiceRegistry):
    with pytest.raises(ConfigurationError, match="not well-formed"):
        load_configuration(registry, "<serviceRegistry><bindings>", RESOLVER)


@pytest.mark.parametrize(
    "directive, message",
    [
        ('<add concrete="MemoryCache" />', "'abstract' attribute is required"),
        ('<add abstract="" concrete="MemoryCache" />', "'abstract' attribute is required"),
        ('<add abstract="Cache" />', "'concrete' attribute is required"),
        ('<add abstract="Cache" concrete="MemoryCache" isSingleton="yes" />', "must be 'true' or 'false'"),
        ("<remove />", "The binding directive 'remove' is unknown"),
    ],
)
def test_invalid_directives(registry: ServiceRegistry, directive: str, message: str):
    with pytest.raises(ConfigurationError, match=message):
        load_configuration(registry, _doc(directive), RESOLVER)
    assert len(registry) == 0


def test_error_quotes_offending_element(registry: ServiceRegistry):
    with pytest.raises(ConfigurationError, match='Element: \'<add concrete="MemoryCache" />\''):
        load_configuration(registry, _doc('<add concrete="MemoryCache" />'), RESOLVER)


def test_unresolvable_type_binds_nothing(registry: ServiceRegistry):
    with pytest.raises(TypeLookupError, match="Missing"):
        load_configuration(registry, _doc('<add abstract="Cache" concrete="Missing" />'), RESOLVER)
    assert Cache not in registry


def test_earlier_directives_stay_applied(registry: ServiceRegistry):
    with pytest.raises(TypeLookupError):
        load_configuration(
            registry,
            _doc('<add abstract="Cache" concrete="MemoryCache" />', '<add abstract="Clock" concrete="Nope" />'),
            RESOLVER,
        )
    assert registry.snapshot_bindings() == {Cache: MemoryCache}


def test_type_mismatch_propagates(registry: ServiceRegistry):
    with pytest.raises(TypeMismatchError):
        load_configuration(registry, _doc('<add abstract="Clock" concrete="MemoryCache" />'), RESOLVER)


def test_singleton_mismatch_does_not_construct(registry: ServiceRegistry):
    before = MemoryCache.instances
    with pytest.raises(TypeMismatchError):
        load_configuration(
            registry, _doc('<add abstract="Clock" concrete="MemoryCache" isSingleton="true" />'), RESOLVER
        )
    assert MemoryCache.instances == before


def test_singleton_requires_parameterless_constructor(registry: ServiceRegistry):
    with pytest.raises(NoMatchingConstructorError):
        load_configuration(
            registry, _doc('<add abstract="Cache" concrete="NeedsArgs" isSingleton="true" />'), RESOLVER
        )


def test_reset_clears_then_loads(registry: ServiceRegistry):
    registry.bind(Clock, SystemClock)
    reset(registry, _doc('<add abstract="Cache" concrete="MemoryCache" />'), RESOLVER)
    assert registry.snapshot_bindings() == {Cache: MemoryCache}

    reset(registry)
    assert len(registry) == 0


def test_parse_configuration_from_path(tmp_path: Path):
    path = tmp_path / "registry.xml"
    path.write_text(_doc("<clear />"))
    assert parse_configuration(path).tag == "serviceRegistry"
    assert parse_configuration(str(path)).tag == "serviceRegistry"
