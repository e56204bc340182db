"""
Reference parsing.

Two textual forms point at another value instead of holding a literal:

- ``var(--name)`` / ``var(--name, fallback)`` - a variable reference
- ``{tokens.size.4x}`` - a dotted path into the token document

Brace references are forgiving about whitespace: ``{brand themes light
palettes.neutral . 100}`` reads as ``brand.palettes.neutral.100``. Brand
references never carry a mode; explicit ``themes.<mode>`` segments are
stripped so the reference follows whatever mode is being resolved.
"""

from __future__ import annotations

import re

from chuk_mcp_tokens.constants import MODE_MARKER, REFERENCE_ROOT_ALIASES
from chuk_mcp_tokens.models.token import PathReference, Reference, VariableReference
from chuk_mcp_tokens.naming import name_for

_VAR_RE = re.compile(r"^var\(\s*(--[A-Za-z0-9_-]+)\s*(?:,\s*(.*?))?\s*\)$", re.DOTALL)
_SPACED_DOT_RE = re.compile(r"\s*\.\s*")
_WHITESPACE_RE = re.compile(r"\s+")
_REPEATED_DOT_RE = re.compile(r"\.{2,}")
_KNOWN_MODES = frozenset({"light", "dark"})


def extract_brace_content(value: str) -> str | None:
    """
    Return the normalized dotted path inside ``{...}``, or None.

    Examples:
        '{tokens.color.gray.100}' -> 'tokens.color.gray.100'
        '{ui-kit .components . button}' -> 'ui-kit.components.button'
    """
    trimmed = value.strip()
    if len(trimmed) < 2 or not (trimmed.startswith("{") and trimmed.endswith("}")):
        return None
    inner = trimmed[1:-1].strip()
    inner = _SPACED_DOT_RE.sub(".", inner)
    inner = _WHITESPACE_RE.sub(".", inner)
    inner = _REPEATED_DOT_RE.sub(".", inner).strip(".")
    return inner or None


def _normalize_path(parts: list[str]) -> tuple[str, ...]:
    root = REFERENCE_ROOT_ALIASES.get(parts[0].lower(), parts[0])
    rest = parts[1:]
    if root == "brand":
        # brand.themes.<mode>.x and brand.<mode>.x both mean brand.x
        if len(rest) >= 2 and rest[0].lower() == MODE_MARKER and rest[1].lower() in _KNOWN_MODES:
            rest = rest[2:]
        elif rest and rest[0].lower() in _KNOWN_MODES:
            rest = rest[1:]
    return (root, *rest)


def parse_reference(value: object) -> Reference | None:
    """Parse a raw value into a reference, or return None for literals."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()

    match = _VAR_RE.match(trimmed)
    if match:
        fallback = match.group(2)
        return VariableReference(name=match.group(1), fallback=fallback or None)

    inner = extract_brace_content(trimmed)
    if inner:
        parts = [p for p in inner.split(".") if p]
        return PathReference(path=_normalize_path(parts))

    return None


def is_reference(value: object) -> bool:
    return parse_reference(value) is not None


def reference_target(reference: Reference, mode: str | None = None) -> str:
    """The variable name a reference points at when resolved under ``mode``."""
    if isinstance(reference, VariableReference):
        return reference.name
    return name_for(reference.path, mode)
