"""
Variable naming - maps document paths to canonical variable names.

Names look like CSS custom properties:

    ("tokens", "size", "4x")                         -> --ds-tokens-size-4x
    ("ui-kit", "components", "button", "height"), "dark"
                                                     -> --ds-themes-dark-ui-kit-components-button-height

Paths under a mode-scoped root (``ui-kit``, ``brand``) embed the mode right
after the ``themes`` marker. Everything here is pure except the process-wide
default mode.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from chuk_mcp_tokens.constants import (
    COMPONENTS_PATH,
    DEFAULT_MODE,
    MODE_MARKER,
    MODE_SCOPED_ROOTS,
    VARIABLE_NAMESPACE,
    ErrorMessages,
)

_PASCAL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATOR_RE = re.compile(r"[\s._/]+")
_REPEATED_HYPHEN_RE = re.compile(r"-{2,}")
_MODE_RE = re.compile(r"^[a-z0-9]+$")
_INVALID_SEGMENTS = frozenset({"", "undefined", "null"})

_default_mode = DEFAULT_MODE


def get_default_mode() -> str:
    """Mode used when a caller does not pass one."""
    return _default_mode


def set_default_mode(mode: str) -> None:
    """Change the process-wide default mode."""
    global _default_mode
    _default_mode = normalize_mode(mode)


def normalize_mode(mode: str) -> str:
    """Lower-case and validate a mode name."""
    cleaned = mode.strip().lower()
    if not _MODE_RE.match(cleaned):
        raise ValueError(ErrorMessages.INVALID_MODE.format(mode=mode))
    return cleaned


def to_kebab_case(value: str) -> str:
    """
    Convert a display or PascalCase name to kebab-case.

    Examples:
        'MenuItem' -> 'menu-item'
        'Accordion item' -> 'accordion-item'
    """
    value = _PASCAL_BOUNDARY_RE.sub(r"\1-\2", value.strip())
    value = _SEPARATOR_RE.sub("-", value).lower()
    return _REPEATED_HYPHEN_RE.sub("-", value).strip("-")


def normalize_segment(segment: object) -> str:
    """Normalize one path segment; returns '' for segments that must be dropped."""
    if segment is None:
        return ""
    cleaned = to_kebab_case(str(segment))
    if cleaned in _INVALID_SEGMENTS:
        return ""
    return cleaned


def is_mode_scoped(path_segments: Iterable[str]) -> bool:
    """Whether variables at this (normalized) path depend on the mode."""
    for segment in path_segments:
        return segment in MODE_SCOPED_ROOTS
    return False


def name_for(
    path_segments: Iterable[object],
    mode: str | None = None,
    *,
    namespace: str = VARIABLE_NAMESPACE,
) -> str:
    """
    Build the canonical variable name for a document path.

    Args:
        path_segments: Path from the document root
        mode: Theme mode; the process default is used when omitted
        namespace: Name prefix

    Returns:
        Variable name such as ``--ds-themes-light-ui-kit-components-button-height``

    Raises:
        ValueError: If no segment survives normalization or the mode is invalid
    """
    raw_segments = list(path_segments)
    segments = [s for s in (normalize_segment(seg) for seg in raw_segments) if s]
    if not segments:
        raise ValueError(ErrorMessages.EMPTY_PATH.format(segments=raw_segments))

    joined = "-".join(segments)
    if is_mode_scoped(segments):
        resolved_mode = normalize_mode(mode) if mode else get_default_mode()
        return f"--{namespace}-{MODE_MARKER}-{resolved_mode}-{joined}"
    return f"--{namespace}-{joined}"


def component_variable_name(
    component: str,
    *segments: str,
    mode: str | None = None,
) -> str:
    """
    Build the variable name of a component property.

    Example:
        component_variable_name('Button', 'variants', 'sizes', 'default', 'properties', 'height')
        => '--ds-themes-light-ui-kit-components-button-variants-sizes-default-properties-height'
    """
    return name_for((*COMPONENTS_PATH, to_kebab_case(component), *segments), mode)


def mode_of(name: str, *, namespace: str = VARIABLE_NAMESPACE) -> str | None:
    """Return the mode embedded in a variable name, or None if mode-independent."""
    prefix = f"--{namespace}-{MODE_MARKER}-"
    if not name.startswith(prefix):
        return None
    mode, _, rest = name[len(prefix) :].partition("-")
    if not rest or not _MODE_RE.match(mode):
        return None
    return mode


def root_of(name: str, *, namespace: str = VARIABLE_NAMESPACE) -> str | None:
    """Return the document root a variable name was built from, if recognizable."""
    prefix = f"--{namespace}-"
    if not name.startswith(prefix):
        return None
    rest = name[len(prefix) :]
    mode = mode_of(name, namespace=namespace)
    if mode is not None:
        rest = rest[len(MODE_MARKER) + len(mode) + 2 :]
    for root in sorted(MODE_SCOPED_ROOTS | {"tokens"}, key=len, reverse=True):
        if rest == root or rest.startswith(f"{root}-"):
            return root
    return None


def is_brand_variable(name: str, *, namespace: str = VARIABLE_NAMESPACE) -> bool:
    """Brand variables must always hold references to tokens."""
    return root_of(name, namespace=namespace) == "brand"


def token_name_to_variable(token_name: str, *, namespace: str = VARIABLE_NAMESPACE) -> str | None:
    """
    Convert a slash token name into a variable reference.

    Examples:
        'color/gray/100' -> 'var(--ds-tokens-color-gray-100)'
        'size/4x' -> 'var(--ds-tokens-size-4x)'
    """
    parts = [p for p in token_name.strip().split("/") if p]
    if len(parts) < 2:
        return None
    try:
        return f"var({name_for(('tokens', *parts), namespace=namespace)})"
    except ValueError:
        return None
