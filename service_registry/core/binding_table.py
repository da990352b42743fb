"""ServiceRegistry: maps abstractions to bindings with two-level locking.

The table lock only guards the ``abstraction -> Binding`` dict. Binding state
is mutated under each binding's own lock, and constructors and diagnostics
run with no registry lock held at all.
"""

from __future__ import annotations

import threading
from types import TracebackType
from typing import Any, Callable, Iterable, TypeVar

from service_registry.core.binding import Binding
from service_registry.core.concrete_type import ConcreteType
from service_registry.core.errors import InvalidArgumentError, NotBoundError, type_name
from service_registry.services.diagnostics.guarded_events import GuardedRegistryEvents
from service_registry.services.diagnostics.interface import RegistryEventsInterface
from service_registry.services.diagnostics.noop_events import NoopRegistryEvents

T = TypeVar("T")


def _require_abstract(abstract_type: Any) -> type:
    if abstract_type is None:
        raise InvalidArgumentError("abstract_type is required")
    if not isinstance(abstract_type, type):
        raise InvalidArgumentError(f"abstract_type must be a class, got {abstract_type!r}")
    return abstract_type


class ServiceRegistry:
    """Registry of abstraction -> implementation bindings.

    ``bind`` registers a concrete class constructed anew on every ``get``;
    ``bind_singleton`` registers one shared instance. All operations are safe
    to call from multiple threads.
    """

    def __init__(self, events: RegistryEventsInterface | None = None) -> None:
        self._bindings: dict[type, Binding] = {}
        self._lock = threading.Lock()
        self._events = GuardedRegistryEvents(events or NoopRegistryEvents())
        self._closed = False

    @property
    def events(self) -> RegistryEventsInterface:
        """The diagnostics sink, wrapped so it never raises."""
        return self._events

    # ── Mutation ──────────────────────────────────────────────────────────

    def bind(self, abstract_type: type, concrete_type: type | ConcreteType) -> None:
        """Register ``concrete_type`` as the implementation of ``abstract_type``.

        Replaces any previous binding, factory or singleton. Raises
        ``TypeMismatchError`` if ``concrete_type`` is not a subclass of
        ``abstract_type``; the previous binding is then left untouched.
        """
        abstract_type = _require_abstract(abstract_type)
        if concrete_type is None:
            raise InvalidArgumentError("concrete_type is required")
        if not isinstance(concrete_type, (type, ConcreteType)):
            raise InvalidArgumentError(
                f"concrete_type must be a class or ConcreteType, got {concrete_type!r}"
            )

        # Validate before touching the table so a rejected type never leaves
        # an unconfigured binding behind.
        descriptor = Binding.validate_concrete(abstract_type, concrete_type)
        self._apply(abstract_type, lambda binding: binding.set_concrete(descriptor))
        self._events.binding_set(type_name(abstract_type), descriptor.name)

    def bind_singleton(self, abstract_type: type, instance: Any) -> None:
        """Register ``instance`` as the shared implementation of ``abstract_type``."""
        abstract_type = _require_abstract(abstract_type)
        if instance is None:
            raise InvalidArgumentError("instance is required")

        Binding.validate_singleton(abstract_type, instance)
        self._apply(abstract_type, lambda binding: binding.set_singleton(instance))
        self._events.singleton_binding_set(type_name(abstract_type), type_name(type(instance)))

    def unbind(self, abstract_type: type) -> None:
        """Remove the binding for ``abstract_type``; unknown types are ignored."""
        abstract_type = _require_abstract(abstract_type)
        with self._lock:
            removed = self._bindings.pop(abstract_type, None)
        if removed is not None:
            self._events.binding_cleared(type_name(abstract_type))

    def clear(self) -> None:
        """Discard every binding at once."""
        with self._lock:
            count = len(self._bindings)
            self._bindings.clear()
        self._events.bindings_cleared(count)

    # ── Resolution ────────────────────────────────────────────────────────

    def get(self, abstract_type: type[T], *args: Any, arg_types: Iterable[type] | None = None) -> T:
        """Return the instance bound to ``abstract_type``.

        ``args`` are passed to the concrete class's constructor. The
        constructor is chosen by exact parameter types: ``arg_types`` when
        given, otherwise the runtime type of each argument. Singletons ignore
        the arguments. Raises ``NotBoundError`` when nothing is bound.
        """
        binding = self._lookup(abstract_type)
        if binding is None:
            raise NotBoundError(abstract_type)
        return binding.resolve(self._signature(args, arg_types), args)

    def try_get(
        self, abstract_type: type[T], *args: Any, arg_types: Iterable[type] | None = None
    ) -> T | None:
        """Like :meth:`get`, but return ``None`` when nothing is bound."""
        binding = self._lookup(abstract_type)
        if binding is None:
            return None
        return binding.resolve(self._signature(args, arg_types), args)

    def find(self, abstract_type: type[T]) -> T | None:
        return self.try_get(abstract_type)

    # ── Introspection ─────────────────────────────────────────────────────

    def snapshot_bindings(self) -> dict[type, type]:
        """Point-in-time copy of abstraction -> concrete class.

        Singleton bindings report the class of the held instance.
        """
        with self._lock:
            bindings = list(self._bindings.values())
        snapshot: dict[type, type] = {}
        for binding in bindings:
            concrete = binding.concrete_type
            if concrete is not None:
                snapshot[binding.abstract_type] = concrete
        return snapshot

    @property
    def bindings(self) -> dict[type, type]:
        return self.snapshot_bindings()

    def __contains__(self, abstract_type: object) -> bool:
        with self._lock:
            return abstract_type in self._bindings

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def close(self) -> None:
        """Release the diagnostics sink. Bound singletons are left alone."""
        if self._closed:
            return
        self._closed = True
        self._events.close()

    def __enter__(self) -> ServiceRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── Internal ──────────────────────────────────────────────────────────

    def _apply(self, abstract_type: type, update: Callable[[Binding], object]) -> None:
        # New bindings are configured before they are published to the table.
        with self._lock:
            binding = self._bindings.get(abstract_type)
        if binding is None:
            fresh = Binding(abstract_type)
            update(fresh)
            with self._lock:
                binding = self._bindings.setdefault(abstract_type, fresh)
            if binding is fresh:
                return
        update(binding)

    def _lookup(self, abstract_type: Any) -> Binding | None:
        abstract_type = _require_abstract(abstract_type)
        with self._lock:
            binding = self._bindings.get(abstract_type)
        if binding is None:
            self._events.binding_not_found(type_name(abstract_type))
        return binding

    @staticmethod
    def _signature(args: tuple[Any, ...], arg_types: Iterable[type] | None) -> tuple[type, ...]:
        if arg_types is None:
            return tuple(type(a) for a in args)
        return tuple(arg_types)
