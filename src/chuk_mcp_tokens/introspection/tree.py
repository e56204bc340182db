"""
Component tree - the label tree shown by selection UIs.

Every component becomes a node whose children mirror its token tree,
except that ``properties`` containers are flattened into their parent.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from chuk_mcp_tokens.constants import PROPERTIES_KEY
from chuk_mcp_tokens.document.model import TokenDocument
from chuk_mcp_tokens.models.token import TokenNode

_WORD_SPLIT_RE = re.compile(r"[-_]+")


def to_label(key: str) -> str:
    """
    Human label for a token key.

    Examples:
        'segmented-control' -> 'Segmented Control'
        'layer_0' -> 'Layer 0'
    """
    return " ".join(word[:1].upper() + word[1:] for word in _WORD_SPLIT_RE.split(key) if word)


class TreeItem(BaseModel):
    """A node of the component tree."""

    key: str = Field(..., description="Dotted key path, e.g. 'button.properties.height'")
    label: str = Field(..., description="Display label")
    children: list[TreeItem] = Field(default_factory=list)

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "children": [child.to_dict() for child in self.children],
        }


TreeItem.model_rebuild()


def _children_of(node: TokenNode, key_path: str) -> list[TreeItem]:
    items: list[TreeItem] = []
    for key, child in node.children.items():
        child_path = f"{key_path}.{key}"
        if key == PROPERTIES_KEY:
            items.extend(_children_of(child, child_path))
            continue
        items.append(TreeItem(key=child_path, label=to_label(key), children=_children_of(child, child_path)))
    return sorted(items, key=lambda item: item.label)


def component_tree(document: TokenDocument) -> list[TreeItem]:
    """Build the sorted label tree of every component in a document."""
    components = document.components_node()
    if components is None:
        return []
    items = [
        TreeItem(key=name, label=to_label(name), children=_children_of(node, name))
        for name, node in components.children.items()
    ]
    return sorted(items, key=lambda item: item.label)
