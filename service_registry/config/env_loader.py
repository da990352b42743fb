"""Loads .env files with KEY=VALUE format.

Supports:
- Comments (lines starting with #)
- Blank lines
- An optional ``export`` prefix
- Quoted values (single or double quotes are stripped)
- Inline comments after values are NOT stripped (to keep values predictable)
"""

from pathlib import Path


def load_env_file(env_name: str = "local", project_root: Path | None = None) -> dict[str, str]:
    """Load settings from ``env_name``.

    ``env_name`` is either a path to an existing file or a short name resolved
    to ``<project_root>/.env/<env_name>.env`` (project_root defaults to the
    current directory). Returns an empty dict if no file is found.
    """
    candidate = Path(env_name)
    if candidate.suffix and candidate.is_file():
        return _parse_env_file(candidate)
    root = project_root or Path.cwd()
    env_file = root / ".env" / f"{env_name}.env"
    if not env_file.exists():
        return {}
    return _parse_env_file(env_file)


def _parse_env_file(path: Path) -> dict[str, str]:
    result: dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        # Strip surrounding quotes
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]
        result[key] = value
    return result
