"""
Style backends - where inline overrides live.

The store only needs get/set/remove by name. A rendering adapter can plug
in its own backend (a stylesheet, a DOM root, a remote session); the
in-memory backend is used everywhere else.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class StyleBackend(Protocol):
    """Narrow get/set/remove contract for override storage."""

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...

    def remove(self, name: str) -> None: ...


class InMemoryStyleBackend:
    """Dictionary-backed override storage."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
