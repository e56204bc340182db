"""
Relevance matchers - how a listener decides a change concerns it.

The publisher cannot enumerate every concrete variable one logical edit
fans out into, so matching is permissive: an extra re-evaluation is fine,
a missed one leaves stale values on screen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class Matcher(Protocol):
    """Decides whether one changed variable name is relevant."""

    def matches(self, name: str) -> bool: ...


@dataclass(frozen=True)
class ExactMatcher:
    """Relevant when a changed name equals one of the watched names."""

    names: frozenset[str]

    def __init__(self, *names: str):
        object.__setattr__(self, "names", frozenset(names))

    def matches(self, name: str) -> bool:
        return name in self.names


@dataclass(frozen=True)
class SubstringMatcher:
    """Relevant when a changed name contains one of the watched fragments."""

    fragments: tuple[str, ...]

    def __init__(self, *fragments: str):
        object.__setattr__(self, "fragments", tuple(fragments))

    def matches(self, name: str) -> bool:
        return any(fragment in name for fragment in self.fragments)


@dataclass(frozen=True)
class AlwaysMatcher:
    """Re-evaluate on every change."""

    def matches(self, name: str) -> bool:
        return True
