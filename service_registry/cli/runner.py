from __future__ import annotations

import json
import sys

from service_registry.bootstrap import build_registry
from service_registry.config.env_loader import load_env_file
from service_registry.config.settings import RegistrySettings
from service_registry.config.type_resolver import resolve_class
from service_registry.core.binding_table import ServiceRegistry
from service_registry.core.errors import RegistryError, type_name

USAGE = "Usage: python -m service_registry <show|get> [flags] [args]"

# Global flag name -> settings key it overrides.
_GLOBAL_FLAGS: dict[str, str] = {
    "config": "SERVICE_REGISTRY_CONFIG",
    "log": "LOG_IMPL",
    "metrics": "METRICS_IMPL",
    "events": "EVENTS_IMPL",
}


def _parse_env_overrides(raw: str) -> dict[str, str]:
    """Parse a JSON string into env overrides. Validates types."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("--env value must be a JSON object")
    for k, v in data.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ValueError("--env JSON must have string keys and string values")
    return data


def _extract_global_flags(remaining: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split global flags from positional arguments.

    Returns (env_overrides, positional). Precedence, lowest first: --env-file,
    --env, then the dedicated flags (--config, --log, --metrics, --events).
    """
    flag_overrides: dict[str, str] = {}
    env_overrides: dict[str, str] = {}
    env_file: str | None = None
    positional: list[str] = []

    all_flag_names = set(_GLOBAL_FLAGS) | {"env", "env-file"}

    i = 0
    while i < len(remaining):
        arg = remaining[i]
        name = arg[2:] if arg.startswith("--") else None
        if name in all_flag_names:
            if i + 1 >= len(remaining):
                raise ValueError(f"Missing value for --{name}")
            value = remaining[i + 1]
            if name == "env":
                env_overrides.update(_parse_env_overrides(value))
            elif name == "env-file":
                env_file = value
            else:
                flag_overrides[_GLOBAL_FLAGS[name]] = value
            i += 2
        else:
            positional.append(arg)
            i += 1

    merged: dict[str, str] = load_env_file(env_file) if env_file else {}
    merged.update(env_overrides)
    merged.update(flag_overrides)
    return merged, positional


def print_help() -> None:
    print(f"\n  {USAGE}\n")
    print("  Commands:")
    print(f"    {'show':20s} Print every binding as 'abstract -> concrete'")
    print(f"    {'get ABSTRACT [ARG..]':20s} Resolve ABSTRACT (dotted name) with string constructor args")
    print()
    print("  Global flags:")
    print(f"    --{'config':20s} XML configuration to load [env: SERVICE_REGISTRY_CONFIG]")
    print(f"    --{'log':20s} Logging format: pretty, memory [default: pretty]")
    print(f"    --{'metrics':20s} Metrics: noop, memory, prometheus [default: noop]")
    print(f"    --{'events':20s} Diagnostics sink: logging, memory, noop [default: logging]")
    print(f"    --{'env':20s} JSON string of env var overrides")
    print(f"    --{'env-file':20s} Environment file (path, or name under .env/)")
    print()


def _show(registry: ServiceRegistry) -> int:
    bindings = registry.snapshot_bindings()
    print(f"Loaded {len(bindings)} binding(s)")
    for abstract_type, concrete_type in sorted(bindings.items(), key=lambda kv: type_name(kv[0])):
        print(f"  {type_name(abstract_type)} -> {type_name(concrete_type)}")
    return 0


def _get(registry: ServiceRegistry, args: list[str]) -> int:
    if not args:
        raise ValueError("get requires the dotted name of an abstract type")
    abstract_type = resolve_class(args[0])
    instance = registry.get(abstract_type, *args[1:])
    print(f"{type_name(abstract_type)} is a {type_name(type(instance))}: {instance!r}")
    return 0


def run_command(argv: list[str]) -> tuple[int, ServiceRegistry | None]:
    """Testable entry point: parses args, builds the registry, runs the command.

    Returns (exit_code, registry). The registry is ``None`` for --help.
    """
    if not argv or argv[0] in ("-h", "--help"):
        print_help()
        return (0, None)

    command, remaining = argv[0], argv[1:]
    if command not in ("show", "get"):
        raise ValueError(f"Unknown command '{command}'. {USAGE}")

    overrides, positional = _extract_global_flags(remaining)
    settings = RegistrySettings(overrides=overrides)
    registry = build_registry(settings)

    try:
        if command == "show":
            return (_show(registry), registry)
        return (_get(registry, positional), registry)
    finally:
        registry.close()


def run_cli(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    try:
        exit_code, _ = run_command(args)
    except (RegistryError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)
