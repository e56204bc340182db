"""
chuk-mcp-tokens - live design-token editing over MCP.

Parses token documents into editable component structures, keeps edits in
a mode-isolated variable store and notifies listeners of every change.
"""

__version__ = "0.1.0"
