"""Error taxonomy raised by the service registry.

Each error also derives from the closest builtin exception so callers that
only know about ``ValueError`` / ``TypeError`` / ``LookupError`` still catch it.
"""

from __future__ import annotations

from typing import Any


def type_name(tp: Any) -> str:
    """Readable name for a class, falling back to ``repr`` for anything else."""
    qualname = getattr(tp, "__qualname__", None)
    if qualname is None:
        return repr(tp)
    module = getattr(tp, "__module__", None)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


class RegistryError(Exception):
    """Base class for every error raised by the registry."""


class InvalidArgumentError(RegistryError, ValueError):
    """A required abstraction, concrete type or instance is missing or invalid."""


class TypeMismatchError(RegistryError, TypeError):
    """A concrete type or instance does not satisfy the bound abstraction."""

    def __init__(self, abstract_type: type, offending: type, *, instance: bool = False) -> None:
        self.abstract_type = abstract_type
        self.offending = offending
        prefix = "Object of type " if instance else ""
        super().__init__(
            f"{prefix}{type_name(offending)} cannot be assigned to a variable "
            f"of type {type_name(abstract_type)}"
        )


class NotBoundError(RegistryError, LookupError):
    """No binding exists for the requested abstraction."""

    def __init__(self, abstract_type: type) -> None:
        self.abstract_type = abstract_type
        super().__init__(
            f"There is no binding for abstract type: {type_name(abstract_type)}. "
            "Consider adding one in the <serviceRegistry> configuration, or using "
            "ServiceRegistry.bind to specify an implementation"
        )


class UnconfiguredError(RegistryError, RuntimeError):
    """A binding exists but never received a concrete type or instance."""

    def __init__(self, abstract_type: type) -> None:
        self.abstract_type = abstract_type
        super().__init__(
            "The service registry is not configured to create instances for "
            f"abstract/interface type '{type_name(abstract_type)}'"
        )


class NoMatchingConstructorError(RegistryError, TypeError):
    """Factory mode found no constructor whose signature matches the request."""

    def __init__(self, concrete_type: type, arg_types: tuple[type, ...]) -> None:
        self.concrete_type = concrete_type
        self.arg_types = arg_types
        params = ", ".join(type_name(t) for t in arg_types)
        super().__init__(
            f"An instance of type '{type_name(concrete_type)}' cannot be created, "
            f"because there is no constructor with parameter types ({params})"
        )


class ConfigurationError(RegistryError, ValueError):
    """A configuration document is malformed."""


class TypeLookupError(RegistryError, LookupError):
    """A type name from a configuration document could not be resolved."""

    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot resolve type '{name}'{detail}")
