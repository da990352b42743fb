"""Walk through the demo configuration the way an application would."""

from __future__ import annotations

from pathlib import Path

import pytest

from service_registry.bootstrap import build_registry
from service_registry.config.loader import reset
from service_registry.config.settings import RegistrySettings
from service_registry.core.errors import NoMatchingConstructorError, NotBoundError
from service_registry.demo.filesystem import Clock, DirectoryHandle, DirectoryHandleImpl, SystemClock
from service_registry.services.logger.factory import LoggerFactory

DEMO_CONFIG = Path(__file__).resolve().parents[2] / "service_registry" / "demo" / "config.xml"


class ManualClock(Clock):
    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def now(self) -> float:
        return self.value


def test_walkthrough():
    factory = LoggerFactory(default_impl="memory")
    settings = RegistrySettings(overrides={"SERVICE_REGISTRY_CONFIG": str(DEMO_CONFIG), "METRICS_IMPL": "memory"})

    with build_registry(settings, logger_factory=factory) as registry:
        assert len(registry.bindings) == 2

        clock = registry.get(Clock)
        assert isinstance(clock, SystemClock)
        assert registry.get(Clock) is clock

        home = registry.get(DirectoryHandle, "c:\\")
        assert isinstance(home, DirectoryHandleImpl)
        assert home.path == "c:\\"
        with pytest.raises(NoMatchingConstructorError):
            registry.get(DirectoryHandle, 3)

        registry.bind(Clock, ManualClock)
        assert registry.get(Clock, 12.5).now() == 12.5

        manual = ManualClock(1.0)
        registry.bind_singleton(Clock, manual)
        assert registry.get(Clock, 99.0) is manual

        registry.unbind(DirectoryHandle)
        assert registry.find(DirectoryHandle) is None
        with pytest.raises(NotBoundError):
            registry.get(DirectoryHandle)

        reset(registry, DEMO_CONFIG)
        assert registry.snapshot_bindings() == {DirectoryHandle: DirectoryHandleImpl, Clock: SystemClock}

    messages = factory.create().messages
    assert "Clearing 1 binding(s)" in messages
    assert any(m.startswith("Cannot find a binding") for m in messages)
