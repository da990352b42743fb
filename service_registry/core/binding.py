"""Per-abstraction binding record: factory or singleton, never both."""

from __future__ import annotations

import enum
import threading
from typing import Any, Sequence

from service_registry.core.concrete_type import ConcreteType
from service_registry.core.errors import (
    InvalidArgumentError,
    NoMatchingConstructorError,
    TypeMismatchError,
    UnconfiguredError,
)


class BindingMode(enum.Enum):
    FACTORY = "factory"
    SINGLETON = "singleton"


class Binding:
    """How requests for one abstraction are satisfied.

    Every field is read and written under the binding's own lock, which is
    independent of the table lock. ``resolve`` releases the lock before it
    runs a constructor, so a slow constructor never blocks rebinding.
    """

    def __init__(self, abstract_type: type) -> None:
        if abstract_type is None:
            raise InvalidArgumentError("abstract_type is required")
        self._abstract_type = abstract_type
        self._lock = threading.Lock()
        self._mode: BindingMode | None = None
        self._concrete_type: ConcreteType | None = None
        self._instance: Any = None

    @property
    def abstract_type(self) -> type:
        return self._abstract_type

    @property
    def mode(self) -> BindingMode | None:
        with self._lock:
            return self._mode

    @property
    def concrete_type(self) -> type | None:
        """The class requests resolve to; for singletons, the instance's class."""
        with self._lock:
            if self._mode is BindingMode.SINGLETON:
                return type(self._instance)
            if self._concrete_type is not None:
                return self._concrete_type.cls
            return None

    @property
    def is_configured(self) -> bool:
        with self._lock:
            return self._mode is not None

    @staticmethod
    def validate_concrete(abstract_type: type, concrete_type: type | ConcreteType) -> ConcreteType:
        if concrete_type is None:
            raise InvalidArgumentError("concrete_type is required")
        descriptor = ConcreteType.of(concrete_type)
        if not descriptor.is_assignable_to(abstract_type):
            raise TypeMismatchError(abstract_type, descriptor.cls)
        # Unreadable constructor hints fail here rather than on first resolve.
        _ = descriptor.constructors
        return descriptor

    @staticmethod
    def validate_singleton(abstract_type: type, instance: Any) -> None:
        if instance is None:
            raise InvalidArgumentError("instance is required")
        if not ConcreteType(type(instance)).is_assignable_to(abstract_type):
            raise TypeMismatchError(abstract_type, type(instance), instance=True)

    def set_concrete(self, concrete_type: type | ConcreteType) -> ConcreteType:
        descriptor = self.validate_concrete(self._abstract_type, concrete_type)

        with self._lock:
            self._mode = BindingMode.FACTORY
            self._concrete_type = descriptor
            self._instance = None
        return descriptor

    def set_singleton(self, instance: Any) -> None:
        self.validate_singleton(self._abstract_type, instance)

        with self._lock:
            self._mode = BindingMode.SINGLETON
            self._concrete_type = None
            self._instance = instance

    def resolve(self, arg_types: Sequence[type], args: Sequence[Any]) -> Any:
        """Return the singleton, or construct a new instance.

        Singletons ignore ``arg_types`` / ``args``. In factory mode the
        constructor whose parameter types equal ``arg_types`` is invoked with
        ``args``; exceptions it raises propagate unchanged.
        """
        with self._lock:
            if self._mode is BindingMode.SINGLETON:
                return self._instance
            descriptor = self._concrete_type
            if descriptor is None:
                raise UnconfiguredError(self._abstract_type)

        signature = tuple(arg_types)
        if len(signature) != len(args):
            raise InvalidArgumentError(
                f"Got {len(args)} constructor argument(s) for a signature of {len(signature)} type(s)"
            )

        ctor = descriptor.find_constructor(signature)
        if ctor is None:
            raise NoMatchingConstructorError(descriptor.cls, signature)
        return ctor.invoke(tuple(args))

    def __repr__(self) -> str:
        return f"Binding({self._abstract_type.__qualname__}, mode={self.mode})"
