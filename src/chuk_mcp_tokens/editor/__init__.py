"""
Editor session - ties the document, introspector, store and broadcaster together.
"""

from chuk_mcp_tokens.editor.session import ResolvedVariable, TokenEditor

__all__ = [
    "ResolvedVariable",
    "TokenEditor",
]
