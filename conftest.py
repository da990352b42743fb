"""Root-level pytest fixtures: isolated registries with recording sinks."""

from __future__ import annotations

import pytest

from service_registry.core.binding_table import ServiceRegistry
from service_registry.core.global_registry import reset_registry
from service_registry.services.diagnostics.memory_events import MemoryRegistryEvents


@pytest.fixture
def events() -> MemoryRegistryEvents:
    return MemoryRegistryEvents()


@pytest.fixture
def registry(events: MemoryRegistryEvents):
    """Fresh registry per test; never the process-wide one."""
    with ServiceRegistry(events) as reg:
        yield reg


@pytest.fixture
def clean_global_registry():
    """Forget the process-wide registry before and after the test."""
    reset_registry()
    yield
    reset_registry()
