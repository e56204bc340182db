"""
Component structure models - what an editor can edit on a component.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_tokens.constants import LAYER_PREFIX


class VariantDescriptor(BaseModel):
    """One variant axis and its options."""

    prop_name: str = Field(..., description="Canonical axis name (color, size, layout...)")
    variants: list[str] = Field(default_factory=list, description="Option names, first-seen order")

    model_config = {"frozen": True}


class PropertyDescriptor(BaseModel):
    """One editable property of a component."""

    name: str = Field(..., description="Property key, e.g. 'font-size'")
    category: str = Field(..., description="colors, size, or the containing root segment")
    type: str = Field(..., description="Token $type, or 'typography-group'")
    variable_name: str = Field(..., description="Canonical variable name")
    path: tuple[str, ...] = Field(..., description="Path inside the component")
    is_variant_specific: bool = Field(False, description="Whether the property sits under an axis")
    variant_prop: str | None = Field(None, description="Innermost axis, if variant-specific")
    variant_path: tuple[tuple[str, str], ...] = Field(
        default=(),
        description="(axis, option) pairs from the outermost axis inward",
    )

    model_config = {"frozen": True}

    @property
    def layer(self) -> str | None:
        """The ``layer-N`` segment of a color property, if any."""
        for segment in self.path:
            if segment.startswith(LAYER_PREFIX):
                return segment
        return None

    def matches_selection(self, selected: dict[str, str]) -> bool:
        """Whether every axis on this property's branch is set to its option."""
        return all(selected.get(axis) == option for axis, option in self.variant_path)


class ComponentStructure(BaseModel):
    """The variants and properties derived for one component."""

    component: str = Field("", description="Normalized component key")
    mode: str = Field("", description="Mode the variable names were built for")
    variants: list[VariantDescriptor] = Field(default_factory=list)
    props: list[PropertyDescriptor] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.variants and not self.props

    def get_variant(self, prop_name: str) -> VariantDescriptor | None:
        for variant in self.variants:
            if variant.prop_name == prop_name:
                return variant
        return None

    def props_named(self, name: str) -> list[PropertyDescriptor]:
        return [p for p in self.props if p.name == name]

    def group_members(self, group: PropertyDescriptor) -> list[PropertyDescriptor]:
        """Individual properties aggregated by a typography group descriptor."""
        depth = len(group.path)
        return [
            p
            for p in self.props
            if len(p.path) == depth + 1 and p.path[:depth] == group.path and p is not group
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "component": self.component,
            "mode": self.mode,
            "variants": [v.model_dump() for v in self.variants],
            "props": [
                {
                    **p.model_dump(exclude={"path", "variant_path"}),
                    "path": list(p.path),
                    "variant_path": [list(pair) for pair in p.variant_path],
                }
                for p in self.props
            ],
        }
