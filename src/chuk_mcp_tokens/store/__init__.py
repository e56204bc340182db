"""
Variable store - overrides, document defaults and reference resolution.
"""

from chuk_mcp_tokens.store.backend import InMemoryStyleBackend, StyleBackend
from chuk_mcp_tokens.store.store import VariableStore

__all__ = [
    "InMemoryStyleBackend",
    "StyleBackend",
    "VariableStore",
]
