"""Apply an XML ``serviceRegistry`` configuration to a registry.

Sample configuration::

    <serviceRegistry>
      <bindings>
        <clear />
        <add abstract="io.IOBase" concrete="io.BytesIO" />
        <add abstract="myapp.clock.Clock" concrete="myapp.clock.SystemClock" isSingleton="true" />
      </bindings>
    </serviceRegistry>

Directives run in document order; each one becomes exactly one ``clear()``,
``bind()`` or ``bind_singleton()`` call. Directives applied before a failing
one stay applied.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from os import PathLike
from pathlib import Path

from service_registry.core.binding_table import ServiceRegistry
from service_registry.core.binding import Binding
from service_registry.core.errors import ConfigurationError, NoMatchingConstructorError
from service_registry.config.type_resolver import TypeResolver, resolve_class

ROOT_ELEMENT = "serviceRegistry"
BINDINGS_ELEMENT = "bindings"


def _local_name(tag: str) -> str:
    # ElementTree spells namespaced tags as "{uri}local".
    return tag.rsplit("}", 1)[-1]


def _outer_xml(element: ET.Element) -> str:
    return ET.tostring(element, encoding="unicode").strip()


def _parse_bool(raw: str) -> bool | None:
    value = raw.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_configuration(source: ET.Element | str | PathLike[str]) -> ET.Element:
    """Return the root element of ``source``.

    ``source`` may already be an element, a string of XML, or a path to a
    file. Strings starting with ``<`` are treated as XML.
    """
    if isinstance(source, ET.Element):
        return source
    try:
        if isinstance(source, str) and source.lstrip().startswith("<"):
            return ET.fromstring(source)
        return ET.parse(Path(source)).getroot()
    except ET.ParseError as exc:
        raise ConfigurationError(f"The configuration is not well-formed XML: {exc}") from exc


def load_configuration(
    registry: ServiceRegistry,
    configuration: ET.Element | str | PathLike[str] | None,
    resolver: TypeResolver = resolve_class,
) -> None:
    """Apply every binding directive in ``configuration`` to ``registry``."""
    registry.events.initializing()

    if configuration is None:
        registry.events.invalid_configuration_fragment("no configuration given")
        raise ConfigurationError(f"The specified configuration must be an element named {ROOT_ELEMENT}")

    root = parse_configuration(configuration)
    if _local_name(root.tag) != ROOT_ELEMENT:
        registry.events.invalid_configuration_fragment(f"root element is '{_local_name(root.tag)}'")
        raise ConfigurationError(f"The specified configuration must be an element named {ROOT_ELEMENT}")

    bindings = next(
        (c for c in root if isinstance(c.tag, str) and _local_name(c.tag) == BINDINGS_ELEMENT), None
    )
    if bindings is None:
        return

    for directive in bindings:
        if not isinstance(directive.tag, str):
            # Comments and processing instructions.
            continue
        name = _local_name(directive.tag)
        match name.lower():
            case "clear":
                registry.clear()
            case "add":
                _apply_add(registry, directive, resolver)
            case _:
                raise ConfigurationError(f"The binding directive '{name}' is unknown.")


def reset(
    registry: ServiceRegistry,
    configuration: ET.Element | str | PathLike[str] | None = None,
    resolver: TypeResolver = resolve_class,
) -> None:
    """Discard all bindings, then load ``configuration`` if one is given."""
    registry.clear()
    if configuration is not None:
        load_configuration(registry, configuration, resolver)


def _apply_add(registry: ServiceRegistry, element: ET.Element, resolver: TypeResolver) -> None:
    abstract_name = element.get("abstract", "")
    if not abstract_name:
        raise ConfigurationError(
            "Invalid binding configuration. The 'abstract' attribute is required "
            f"(Element: '{_outer_xml(element)}')"
        )

    concrete_name = element.get("concrete", "")
    if not concrete_name:
        raise ConfigurationError(
            "Invalid binding configuration. The 'concrete' attribute is required "
            f"(Element: '{_outer_xml(element)}')"
        )

    is_singleton = False
    raw_singleton = element.get("isSingleton", "")
    if raw_singleton:
        parsed = _parse_bool(raw_singleton)
        if parsed is None:
            raise ConfigurationError(
                "Invalid binding configuration. If the optional 'isSingleton' is present, "
                f"it must be 'true' or 'false' (Element: '{_outer_xml(element)}')"
            )
        is_singleton = parsed

    abstract_type = resolver(abstract_name)
    concrete_type = resolver(concrete_name)

    if not is_singleton:
        registry.bind(abstract_type, concrete_type)
        return

    # Check assignability before running any constructor code.
    descriptor = Binding.validate_concrete(abstract_type, concrete_type)
    ctor = descriptor.find_constructor(())
    if ctor is None:
        raise NoMatchingConstructorError(concrete_type, ())
    registry.bind_singleton(abstract_type, ctor.invoke(()))
