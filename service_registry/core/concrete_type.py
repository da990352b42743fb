from __future__ import annotations

import threading
from typing import Any, Callable, Iterable

from service_registry.core.constructors import (
    ConstructorSignature,
    derive_constructors,
    find_constructor,
)
from service_registry.core.errors import InvalidArgumentError, type_name


class ConcreteType:
    """Descriptor for a constructible class.

    Wraps the class with an assignability check and a table of constructor
    signatures. Signatures come from the class's ``__init__`` type hints and
    from any alternative constructors added with :meth:`add_constructor`.
    Two descriptors are equal when they wrap the same class.
    """

    def __init__(
        self,
        cls: type,
        constructors: Iterable[tuple[Iterable[type], Callable[..., Any]]] | None = None,
    ) -> None:
        if not isinstance(cls, type):
            raise InvalidArgumentError(f"Concrete type must be a class, got {cls!r}")
        self._cls = cls
        self._lock = threading.Lock()
        self._explicit: list[ConstructorSignature] = []
        self._derived: list[ConstructorSignature] | None = None
        for param_types, factory in constructors or ():
            self.add_constructor(param_types, factory)

    @classmethod
    def of(cls, concrete: type | ConcreteType) -> ConcreteType:
        if isinstance(concrete, ConcreteType):
            return concrete
        return cls(concrete)

    @property
    def cls(self) -> type:
        return self._cls

    @property
    def name(self) -> str:
        return type_name(self._cls)

    def is_assignable_to(self, abstract_type: type) -> bool:
        try:
            return issubclass(self._cls, abstract_type)
        except TypeError as exc:
            raise InvalidArgumentError(
                f"Cannot check assignability to {type_name(abstract_type)}: {exc}"
            ) from exc

    def add_constructor(
        self, param_types: Iterable[type], factory: Callable[..., Any] | None = None
    ) -> ConcreteType:
        """Register an alternative constructor taking exactly ``param_types``.

        ``factory`` defaults to the class itself. Explicit constructors are
        tried before the ones derived from ``__init__``.
        """
        types = tuple(param_types)
        for t in types:
            if not isinstance(t, type):
                raise InvalidArgumentError(f"Constructor parameter types must be classes, got {t!r}")
        signature = ConstructorSignature(types, factory or self._cls)
        with self._lock:
            self._explicit = [c for c in self._explicit if c.param_types != types]
            self._explicit.append(signature)
        return self

    @property
    def constructors(self) -> list[ConstructorSignature]:
        with self._lock:
            explicit = list(self._explicit)
            derived = self._derived
        if derived is None:
            derived = derive_constructors(self._cls)
            with self._lock:
                self._derived = derived
        return explicit + derived

    def find_constructor(self, arg_types: tuple[type, ...]) -> ConstructorSignature | None:
        return find_constructor(self.constructors, arg_types)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConcreteType):
            return self._cls is other._cls
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._cls)

    def __repr__(self) -> str:
        return f"ConcreteType({self.name})"
