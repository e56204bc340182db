"""
Token documents - immutable snapshots of the token tree and their loader.
"""

from chuk_mcp_tokens.document.loader import DocumentLoader
from chuk_mcp_tokens.document.model import (
    TokenDocument,
    compute_revision,
    parse_document,
    parse_node,
    parse_raw_value,
)

__all__ = [
    "DocumentLoader",
    "TokenDocument",
    "compute_revision",
    "parse_document",
    "parse_node",
    "parse_raw_value",
]
