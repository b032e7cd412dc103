"""Process-wide in-memory key-value overlay.

Selectors consult the overlay before the process environment, so a
program can pin keys such as ``EnvType`` without touching ``os.environ``.
The engine only reads from it.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Callable, Iterator, Mapping


class OverlayStore:
    """Thread-safe string-to-string mapping. Absent keys read as ``""``."""

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str:
        with self._lock:
            return self._data.get(key, "")

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def update(self, values: Mapping[str, str]) -> None:
        with self._lock:
            self._data.update(values)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def snapshot(self) -> dict[str, str]:
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


overlay = OverlayStore()


def environ_lookup(key: str) -> str:
    return os.environ.get(key, "")


def layered_lookup(store: OverlayStore | None = None) -> Callable[[str], str]:
    """Build a lookup that reads *store* first, then the process environment.

    An empty overlay value falls through to the environment.
    """
    source = store if store is not None else overlay

    def _lookup(key: str) -> str:
        value = source.get(key)
        if value == "":
            value = environ_lookup(key)
        return value

    return _lookup
