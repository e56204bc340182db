"""
Pydantic models for the token system.

This module provides:
- TokenValue / TokenContainer: the tagged token node union
- Dimension, VariableReference, PathReference: raw value shapes
- VariantDescriptor / PropertyDescriptor / ComponentStructure: introspection output
"""

from chuk_mcp_tokens.models.structure import (
    ComponentStructure,
    PropertyDescriptor,
    VariantDescriptor,
)
from chuk_mcp_tokens.models.token import (
    Dimension,
    PathReference,
    RawValue,
    Reference,
    TokenContainer,
    TokenNode,
    TokenValue,
    VariableReference,
    render_raw,
)

__all__ = [
    "ComponentStructure",
    "Dimension",
    "PathReference",
    "PropertyDescriptor",
    "RawValue",
    "Reference",
    "TokenContainer",
    "TokenNode",
    "TokenValue",
    "VariableReference",
    "VariantDescriptor",
    "render_raw",
]
