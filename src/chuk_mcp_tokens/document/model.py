"""
Token document - an immutable snapshot of a token tree for one mode.

The snapshot is built once from decoded JSON/YAML by ``parse_document`` and
never mutated. A mode switch produces a new snapshot sharing the same tree.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_tokens.constants import COMPONENTS_PATH, METADATA_PREFIX, MODE_MARKER, TokenType
from chuk_mcp_tokens.diagnostics import Diagnostic, DiagnosticKind, DiagnosticSink, log_diagnostic
from chuk_mcp_tokens.models.token import (
    Dimension,
    RawValue,
    TokenContainer,
    TokenNode,
    TokenValue,
)
from chuk_mcp_tokens.naming import get_default_mode, normalize_mode, to_kebab_case
from chuk_mcp_tokens.references import parse_reference

_NUMERIC_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")


class TokenDocument(BaseModel):
    """A parsed token document bound to a mode."""

    root: TokenContainer = Field(default_factory=TokenContainer)
    mode: str = Field(default_factory=get_default_mode, description="Active theme mode")
    revision: str = Field("", description="Content hash of the source document")
    name: str = Field("", description="Document name, usually the file stem")

    model_config = {"frozen": True}

    def with_mode(self, mode: str) -> TokenDocument:
        """Same tree, different mode."""
        return self.model_copy(update={"mode": normalize_mode(mode)})

    def lookup(self, path: Sequence[str]) -> TokenNode | None:
        """Find the node at a path from the document root."""
        node: TokenNode = self.root
        for key in path:
            children = node.children
            if key not in children:
                return None
            node = children[key]
        return node

    def components_node(self) -> TokenContainer | None:
        node = self.lookup(COMPONENTS_PATH)
        return node if isinstance(node, TokenContainer) else None

    def component_names(self) -> list[str]:
        """Keys of every component in the document."""
        components = self.components_node()
        if components is None:
            return []
        return sorted(components.children)

    def component(self, name: str) -> TokenNode | None:
        """Find a component by display, PascalCase or kebab-case name."""
        components = self.components_node()
        if components is None:
            return None
        return components.children.get(to_kebab_case(name))

    def iter_values(self) -> Iterator[tuple[tuple[str, ...], TokenValue]]:
        """Yield every leaf with its full path from the document root."""
        yield from iter_leaves(self.root, ())

    def iter_mode_values(self) -> Iterator[tuple[tuple[str, ...], TokenValue]]:
        """
        Yield the leaves visible in the active mode.

        A brand tree split per mode (``brand.themes.<mode>...``) contributes
        only the active mode's subtree, re-rooted at ``brand``. Other roots
        and flat brand trees come through unchanged.
        """
        for path, value in self.iter_values():
            if len(path) > 1 and path[0] == "brand" and path[1] == MODE_MARKER:
                if len(path) < 4 or path[2].lower() != self.mode:
                    continue
                path = ("brand", *path[3:])
            yield path, value


def iter_leaves(
    node: TokenNode,
    prefix: tuple[str, ...] = (),
) -> Iterator[tuple[tuple[str, ...], TokenValue]]:
    """Yield every TokenValue below a node with its path relative to the node."""
    for key, child in node.children.items():
        path = (*prefix, key)
        if isinstance(child, TokenValue):
            yield path, child
        yield from iter_leaves(child, path)


def compute_revision(raw: Mapping[str, Any]) -> str:
    """Content hash of a raw document; equal content gives equal revisions."""
    canonical = json.dumps(raw, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def parse_document(
    raw: Mapping[str, Any],
    mode: str | None = None,
    *,
    name: str = "",
    on_diagnostic: DiagnosticSink = log_diagnostic,
) -> TokenDocument:
    """
    Build a document snapshot from decoded JSON/YAML.

    Malformed subtrees are dropped and reported; the rest of the document
    is kept.

    Args:
        raw: Decoded document
        mode: Theme mode (process default when omitted)
        name: Document name
        on_diagnostic: Sink for MalformedNode diagnostics

    Returns:
        The document snapshot
    """
    data = dict(raw)
    # Legacy shape: components at the top level instead of under ui-kit
    if COMPONENTS_PATH[0] not in data and COMPONENTS_PATH[1] in data:
        data = {COMPONENTS_PATH[0]: {COMPONENTS_PATH[1]: data.pop(COMPONENTS_PATH[1])}, **data}

    root = _parse_container(data, (), on_diagnostic)
    return TokenDocument(
        root=root,
        mode=normalize_mode(mode) if mode else get_default_mode(),
        revision=compute_revision(data),
        name=name,
    )


def _parse_container(
    raw: Mapping[str, Any],
    path: tuple[str, ...],
    on_diagnostic: DiagnosticSink,
) -> TokenContainer:
    children: dict[str, TokenNode] = {}
    metadata: dict[str, Any] = {}
    for key, value in raw.items():
        key = str(key)
        if key.startswith(METADATA_PREFIX):
            metadata[key] = value
            continue
        node = parse_node(value, (*path, key), on_diagnostic)
        if node is not None:
            children[key] = node
    return TokenContainer(children=children, metadata=metadata)


def parse_node(
    raw: Any,
    path: tuple[str, ...],
    on_diagnostic: DiagnosticSink = log_diagnostic,
) -> TokenNode | None:
    """Parse one raw node; returns None (and reports) for malformed input."""
    subject = ".".join(path)
    if not isinstance(raw, Mapping):
        on_diagnostic(
            Diagnostic(
                kind=DiagnosticKind.MALFORMED_NODE,
                message=f"Expected an object, got {type(raw).__name__}",
                subject=subject,
            )
        )
        return None

    has_value = "$value" in raw
    has_type = "$type" in raw
    if has_value != has_type:
        on_diagnostic(
            Diagnostic(
                kind=DiagnosticKind.MALFORMED_NODE,
                message="Token has only one of $type/$value",
                subject=subject,
            )
        )
        return None

    if not has_value:
        return _parse_container(raw, path, on_diagnostic)

    token_type = raw["$type"]
    if not isinstance(token_type, str) or not token_type:
        on_diagnostic(
            Diagnostic(
                kind=DiagnosticKind.MALFORMED_NODE,
                message=f"Invalid $type {token_type!r}",
                subject=subject,
            )
        )
        return None

    extras = {k: v for k, v in raw.items() if not str(k).startswith(METADATA_PREFIX)}
    description = raw.get("$description")
    return TokenValue(
        token_type=token_type,
        raw=parse_raw_value(raw["$value"], token_type),
        description=description if isinstance(description, str) else None,
        children=_parse_container(extras, path, on_diagnostic).children,
    )


def parse_raw_value(value: Any, token_type: str = "") -> RawValue:
    """Turn a ``$value`` into a literal, Dimension or reference."""
    reference = parse_reference(value)
    if reference is not None:
        return reference

    if isinstance(value, Mapping) and "value" in value:
        inner = value["value"]
        reference = parse_reference(inner)
        if reference is not None:
            return reference
        if isinstance(inner, str) and _NUMERIC_RE.match(inner.strip()):
            text = inner.strip()
            inner = float(text) if "." in text else int(text)
        if isinstance(inner, (int, float)) and not isinstance(inner, bool):
            default_unit = "px" if token_type == TokenType.DIMENSION.value else ""
            return Dimension(value=inner, unit=str(value.get("unit", default_unit)))
        return inner

    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)
    return value
