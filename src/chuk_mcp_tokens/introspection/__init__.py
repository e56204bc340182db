"""
Structure introspection - what is editable on each component.
"""

from chuk_mcp_tokens.introspection.introspector import (
    StructureIntrospector,
    category_for,
    is_typography_group,
)
from chuk_mcp_tokens.introspection.tree import TreeItem, component_tree, to_label

__all__ = [
    "StructureIntrospector",
    "TreeItem",
    "category_for",
    "component_tree",
    "is_typography_group",
    "to_label",
]
