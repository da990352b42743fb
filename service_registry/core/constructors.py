"""Constructor signatures and their derivation from ``__init__`` type hints.

A signature is an ordered tuple of parameter types plus the callable that
builds an instance from positional arguments of exactly those types. Matching
is by identity of each type, never by subclass compatibility.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, get_type_hints

from service_registry.core.errors import InvalidArgumentError

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class ConstructorSignature:
    param_types: tuple[type, ...]
    factory: Callable[..., Any]

    def matches(self, arg_types: tuple[type, ...]) -> bool:
        if len(self.param_types) != len(arg_types):
            return False
        return all(p is a for p, a in zip(self.param_types, arg_types))

    def invoke(self, args: tuple[Any, ...]) -> Any:
        return self.factory(*args)


def _init_hints(cls: type) -> dict[str, Any]:
    init = cls.__init__
    # Builtins and C extensions expose slot wrappers without annotations.
    if not inspect.isfunction(init):
        return {}
    try:
        hints = get_type_hints(init)
    except Exception as exc:
        raise InvalidArgumentError(f"Cannot read type hints for {cls.__name__}.__init__: {exc}") from exc
    hints.pop("return", None)
    return hints


def derive_constructors(cls: type) -> list[ConstructorSignature]:
    """Build the signatures ``cls(...)`` accepts from its ``__init__`` hints.

    Each trailing positional parameter with a default yields an extra, shorter
    signature. Unannotated parameters end the derivable prefix. Required
    keyword-only parameters make positional construction impossible, so no
    signature is produced at all.
    """
    try:
        sig = inspect.signature(cls)
    except (TypeError, ValueError):
        return []

    hints = _init_hints(cls)
    params = list(sig.parameters.values())

    for param in params:
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is param.empty:
            return []

    positional = [p for p in params if p.kind in _POSITIONAL]
    required = sum(1 for p in positional if p.default is p.empty)

    types: list[type] = []
    for param in positional:
        hint = hints.get(param.name)
        if not isinstance(hint, type):
            break
        types.append(hint)

    return [
        ConstructorSignature(tuple(types[:arity]), cls)
        for arity in range(required, len(types) + 1)
    ]


def find_constructor(
    constructors: list[ConstructorSignature], arg_types: tuple[type, ...]
) -> ConstructorSignature | None:
    for ctor in constructors:
        if ctor.matches(arg_types):
            return ctor
    return None
