"""
Token node models - the tagged union behind a token document.

A node is either a TokenValue (has ``$type`` and ``$value``) or a
TokenContainer (pure grouping). Raw values are literals, dimensions or
references to other tokens.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class Dimension(BaseModel):
    """A number with a unit, e.g. ``{"value": 4, "unit": "px"}``."""

    value: int | float = Field(..., description="Magnitude")
    unit: str = Field("px", description="CSS unit")

    model_config = {"frozen": True}

    def render(self) -> str:
        return f"{self.value}{self.unit}"


class VariableReference(BaseModel):
    """Reference to another variable: ``var(--name)`` or ``var(--name, fallback)``."""

    name: str = Field(..., description="Canonical variable name")
    fallback: str | None = Field(None, description="Value used when the target is missing")

    model_config = {"frozen": True}

    def render(self) -> str:
        if self.fallback is None:
            return f"var({self.name})"
        return f"var({self.name}, {self.fallback})"


class PathReference(BaseModel):
    """Reference into the document: ``{tokens.size.4x}``."""

    path: tuple[str, ...] = Field(..., description="Normalized document path")

    model_config = {"frozen": True}

    @property
    def root(self) -> str:
        return self.path[0] if self.path else ""

    def render(self) -> str:
        return "{" + ".".join(self.path) + "}"


Reference = Union[VariableReference, PathReference]
RawValue = Union[
    Dimension,
    VariableReference,
    PathReference,
    bool,
    int,
    float,
    str,
    dict[str, Any],
    list[Any],
    None,
]


def render_raw(raw: RawValue) -> str | None:
    """Render a raw value as the string stored for a variable."""
    if raw is None:
        return None
    if isinstance(raw, (Dimension, VariableReference, PathReference)):
        return raw.render()
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, (dict, list)):
        return json.dumps(raw, sort_keys=True)
    return str(raw)


class TokenValue(BaseModel):
    """A leaf token."""

    kind: Literal["value"] = "value"
    token_type: str = Field(..., alias="type", description="The $type of the token")
    raw: RawValue = Field(None, description="The parsed $value")
    description: str | None = Field(None, description="The $description, if any")
    children: dict[str, TokenNode] = Field(
        default_factory=dict,
        description="Non-metadata keys next to $type/$value",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def is_reference(self) -> bool:
        return isinstance(self.raw, (VariableReference, PathReference))

    def render(self) -> str | None:
        return render_raw(self.raw)


class TokenContainer(BaseModel):
    """A grouping node."""

    kind: Literal["container"] = "container"
    children: dict[str, TokenNode] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict, description="$-prefixed keys")

    model_config = {"frozen": True}

    def child(self, key: str) -> TokenNode | None:
        return self.children.get(key)


TokenNode = Annotated[Union[TokenValue, TokenContainer], Field(discriminator="kind")]

TokenValue.model_rebuild()
TokenContainer.model_rebuild()
