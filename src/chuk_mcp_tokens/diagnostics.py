"""
Diagnostics - non-fatal problems found while parsing or resolving tokens.

Nothing in the core raises for bad token data. Problems are reported as
diagnostics to a sink (any callable) and the caller gets an empty or
``None`` result instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    """Kinds of recoverable problems."""

    LOOKUP_MISS = "lookup-miss"  # Component or variable not found
    MALFORMED_NODE = "malformed-node"  # Unrecognized token shape
    REFERENCE_CYCLE = "reference-cycle"  # Chain exceeded the depth bound
    MODE_MISMATCH = "mode-mismatch"  # Resolution would cross modes


@dataclass(frozen=True)
class Diagnostic:
    """A single recoverable problem."""

    kind: DiagnosticKind
    message: str
    subject: str  # Path or variable name the problem is about


DiagnosticSink = Callable[[Diagnostic], None]


def log_diagnostic(diagnostic: Diagnostic) -> None:
    """Default sink: send the diagnostic to the module logger."""
    logger.debug("%s: %s (%s)", diagnostic.kind.value, diagnostic.message, diagnostic.subject)


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        """Return the collected diagnostics of one kind."""
        return [d for d in self.diagnostics if d.kind == kind]

    def clear(self) -> None:
        self.diagnostics.clear()
