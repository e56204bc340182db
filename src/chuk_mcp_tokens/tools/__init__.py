"""
MCP tool implementations.

Tools are organized by domain:
- document - Document loading and mode switching
- structure - Component introspection and variable names
- variables - Reading, editing and resolving variables
"""

from chuk_mcp_tokens.tools.document import register_document_tools
from chuk_mcp_tokens.tools.structure import register_structure_tools
from chuk_mcp_tokens.tools.variables import register_variable_tools

__all__ = [
    "register_document_tools",
    "register_structure_tools",
    "register_variable_tools",
]
