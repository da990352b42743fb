"""Optional process-wide registry for code that cannot be handed one.

Prefer passing a :class:`ServiceRegistry` explicitly; this accessor exists for
application entry points and legacy call sites.
"""

from __future__ import annotations

import threading

from service_registry.core.binding_table import ServiceRegistry

_lock = threading.Lock()
_registry: ServiceRegistry | None = None


def get_registry() -> ServiceRegistry:
    """Return the process-wide registry, building it from the environment on first use."""
    global _registry
    with _lock:
        if _registry is None:
            from service_registry.bootstrap import build_registry

            _registry = build_registry()
        return _registry


def set_registry(registry: ServiceRegistry) -> ServiceRegistry | None:
    """Install ``registry`` as the process-wide one and return the previous one."""
    global _registry
    with _lock:
        previous, _registry = _registry, registry
    return previous


def reset_registry() -> None:
    """Close and forget the process-wide registry."""
    global _registry
    with _lock:
        previous, _registry = _registry, None
    if previous is not None:
        previous.close()
