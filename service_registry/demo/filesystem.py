"""Sample abstractions and implementations for the CLI and documentation.

``config.xml`` next to this module binds them; try::

    python -m service_registry show --config service_registry/demo/config.xml
    python -m service_registry get service_registry.demo.filesystem.DirectoryHandle /tmp \
        --config service_registry/demo/config.xml
"""

from __future__ import annotations

import os
import time
from abc import ABC, abstractmethod


class DirectoryHandle(ABC):
    @property
    @abstractmethod
    def path(self) -> str: ...

    @abstractmethod
    def exists(self) -> bool: ...


class DirectoryHandleImpl(DirectoryHandle):
    """Handle on a local directory; defaults to the working directory."""

    def __init__(self, path: str = ".") -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.isdir(self._path)

    def __repr__(self) -> str:
        return f"DirectoryHandleImpl({self._path!r})"


class Clock(ABC):
    @abstractmethod
    def now(self) -> float: ...


class SystemClock(Clock):
    def now(self) -> float:
        return time.time()

    def __repr__(self) -> str:
        return "SystemClock()"
