"""Resolve type names from configuration documents to classes.

Names use dotted module paths: ``package.module.ClassName``. A colon may
separate the module from a nested attribute path, as in
``package.module:Outer.Inner``. Imports are lazy, so loading a configuration
only imports the modules its bindings name.
"""

from __future__ import annotations

import importlib
from typing import Callable, Mapping

from service_registry.core.errors import TypeLookupError

TypeResolver = Callable[[str], type]


def _split(name: str) -> tuple[str, list[str]]:
    if ":" in name:
        module_path, _, attr_path = name.partition(":")
        return module_path, attr_path.split(".")
    if "." not in name:
        return "builtins", [name]
    module_path, class_name = name.rsplit(".", 1)
    return module_path, [class_name]


def resolve_class(dotted_path: str) -> type:
    """Import and return the class named by ``dotted_path``."""
    name = dotted_path.strip()
    if not name:
        raise TypeLookupError(dotted_path, "empty type name")
    module_path, attrs = _split(name)
    try:
        obj: object = importlib.import_module(module_path)
    except ImportError as exc:
        raise TypeLookupError(name, f"cannot import module '{module_path}'") from exc
    for attr in attrs:
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise TypeLookupError(name, f"'{module_path}' has no attribute '{attr}'") from exc
    if not isinstance(obj, type):
        raise TypeLookupError(name, f"{obj!r} is not a class")
    return obj


def mapping_resolver(aliases: Mapping[str, type], fallback: TypeResolver | None = None) -> TypeResolver:
    """Resolver that looks names up in ``aliases`` before trying ``fallback``."""

    def resolve(name: str) -> type:
        key = name.strip()
        if key in aliases:
            return aliases[key]
        if fallback is None:
            raise TypeLookupError(key, "no such alias")
        return fallback(key)

    return resolve
