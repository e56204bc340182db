"""
Variable store - effective values and reference resolution.

Every variable has at most two values: an inline override held by the
style backend and a default taken from the token document. The override
wins. Values may be references (``var(--name)``, ``var(--name, fallback)``
or ``{dotted.path}``) which ``resolve`` follows to a literal.

Mode isolation comes from the names themselves: mode-dependent names embed
their mode, so an override written for ``dark`` lives under a different
name than the ``light`` one. Resolution additionally refuses every hop onto
a name whose embedded mode differs from the mode being resolved.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from chuk_mcp_tokens.constants import MAX_REFERENCE_DEPTH, VARIABLE_NAMESPACE, ErrorMessages
from chuk_mcp_tokens.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from chuk_mcp_tokens.document.model import TokenDocument
from chuk_mcp_tokens.models.token import VariableReference
from chuk_mcp_tokens.naming import (
    get_default_mode,
    is_brand_variable,
    mode_of,
    name_for,
    normalize_mode,
    token_name_to_variable,
)
from chuk_mcp_tokens.references import is_reference, parse_reference, reference_target
from chuk_mcp_tokens.store.backend import InMemoryStyleBackend, StyleBackend

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"^\s*(-?\d*\.?\d+)")


class VariableStore:
    """
    Name -> value map with document defaults and inline overrides.

    Example:
        store = VariableStore()
        store.set("--x", "var(--y)")
        store.set("--y", "4px")
        store.resolve("--x")  # "4px"
    """

    def __init__(
        self,
        backend: StyleBackend | None = None,
        *,
        max_depth: int = MAX_REFERENCE_DEPTH,
        on_diagnostic: DiagnosticSink = log_diagnostic,
        namespace: str = VARIABLE_NAMESPACE,
    ):
        """
        Initialize the store.

        Args:
            backend: Override storage (in-memory when omitted)
            max_depth: Longest reference chain that still resolves
            on_diagnostic: Sink for lookup, cycle and mode diagnostics
            namespace: Variable name prefix used for mode detection
        """
        self.backend: StyleBackend = backend if backend is not None else InMemoryStyleBackend()
        self.max_depth = max_depth
        self.on_diagnostic = on_diagnostic
        self.namespace = namespace
        self._defaults: dict[str, str] = {}
        self._written: set[str] = set()

    # ------------------------------------------------------------------
    # Reads and writes
    # ------------------------------------------------------------------

    def get(self, name: str) -> str | None:
        """Effective raw value: override, then document default."""
        override = self.backend.get(name)
        if override is not None:
            return override
        return self._defaults.get(name)

    def get_override(self, name: str) -> str | None:
        return self.backend.get(name)

    def get_default(self, name: str) -> str | None:
        return self._defaults.get(name)

    def set(self, name: str, value: object) -> bool:
        """
        Write an inline override.

        Brand variables only accept references. A slash token name such as
        ``color/gray/100`` is turned into the matching ``var()`` reference;
        any other literal is rejected.
        Writing None removes the override instead.

        Args:
            name: Canonical variable name
            value: New raw value

        Returns:
            True if the override was written
        """
        if not name:
            raise ValueError(ErrorMessages.EMPTY_PATH.format(segments=[name]))
        if value is None:
            self.remove(name)
            return True
        text = str(value).strip()

        if is_brand_variable(name, namespace=self.namespace) and not is_reference(text):
            fixed = token_name_to_variable(text, namespace=self.namespace)
            if fixed is None:
                logger.warning(ErrorMessages.REJECTED_VALUE.format(name=name, value=text))
                return False
            logger.debug(f"Rewrote brand value {text!r} to {fixed}")
            text = fixed

        self.backend.set(name, text)
        self._written.add(name)
        logger.debug(f"Set {name} = {text}")
        return True

    def set_many(self, values: Mapping[str, object]) -> int:
        """Write several overrides; returns how many were accepted."""
        return sum(1 for name, value in values.items() if self.set(name, value))

    def remove(self, name: str) -> None:
        """Drop an override; the document default shows through again."""
        self.backend.remove(name)
        self._written.discard(name)

    def set_default(self, name: str, value: str) -> None:
        self._defaults[name] = value

    def load_document(self, document: TokenDocument) -> int:
        """
        Replace every document default with the leaves of a snapshot.

        Only the active mode's leaves are loaded. The new defaults are built
        aside and swapped in with one assignment.

        Returns:
            Number of defaults loaded
        """
        defaults: dict[str, str] = {}
        for path, value in document.iter_mode_values():
            rendered = value.render()
            if rendered is not None:
                defaults[name_for(path, document.mode, namespace=self.namespace)] = rendered
        self._defaults = defaults
        logger.debug(f"Loaded {len(defaults)} defaults for mode {document.mode}")
        return len(defaults)

    def clear_defaults(self) -> None:
        self._defaults = {}

    def overrides(self) -> dict[str, str]:
        """Snapshot of the overrides written through this store."""
        snapshot: dict[str, str] = {}
        for name in sorted(self._written):
            value = self.backend.get(name)
            if value is not None:
                snapshot[name] = value
        return snapshot

    def reset(self) -> int:
        """Remove every override this store wrote; returns how many."""
        names = list(self._written)
        for name in names:
            self.backend.remove(name)
        self._written.clear()
        return len(names)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, name: str, mode: str | None = None) -> str | None:
        """
        Follow a variable's reference chain to a literal.

        Args:
            name: Variable to resolve
            mode: Mode being resolved (process default when omitted)

        Returns:
            The literal, or None when missing, cyclic or crossing modes
        """
        resolved_mode = normalize_mode(mode) if mode else get_default_mode()
        return self._resolve_name(name, resolved_mode, 0)

    def resolve_value(self, raw: object, mode: str | None = None) -> object:
        """Resolve a raw value; literals come back unchanged."""
        if not isinstance(raw, str):
            return raw
        resolved_mode = normalize_mode(mode) if mode else get_default_mode()
        return self._resolve_raw(raw, resolved_mode, 0)

    def resolve_number(
        self,
        name: str,
        fallback: float | None = None,
        mode: str | None = None,
    ) -> float | None:
        """Resolve a variable and read its leading number ('4px' -> 4.0)."""
        value = self.resolve(name, mode)
        if value is None:
            return fallback
        match = _NUMBER_RE.match(value)
        if not match:
            return fallback
        return float(match.group(1))

    def _resolve_name(self, name: str, mode: str, depth: int) -> str | None:
        if depth > self.max_depth:
            self._report(DiagnosticKind.REFERENCE_CYCLE, "Reference chain too deep", name)
            return None

        embedded = mode_of(name, namespace=self.namespace)
        if embedded is not None and embedded != mode:
            self._report(DiagnosticKind.MODE_MISMATCH, f"Resolving for mode {mode}", name)
            return None

        raw = self.get(name)
        if raw is None:
            self._report(DiagnosticKind.LOOKUP_MISS, "Variable has no value", name)
            return None
        return self._resolve_raw(raw, mode, depth + 1)

    def _resolve_raw(self, raw: str, mode: str, depth: int) -> str | None:
        reference = parse_reference(raw)
        if reference is None:
            return raw

        try:
            target = reference_target(reference, mode)
        except ValueError:
            self._report(DiagnosticKind.MALFORMED_NODE, "Unusable reference", raw)
            return None

        value = self._resolve_name(target, mode, depth)
        if value is None and isinstance(reference, VariableReference) and reference.fallback:
            return self._resolve_raw(reference.fallback, mode, depth)
        return value

    def _report(self, kind: DiagnosticKind, message: str, subject: str) -> None:
        self.on_diagnostic(Diagnostic(kind=kind, message=message, subject=subject))
