#!/usr/bin/env python3
"""
Async Tokens MCP Server using chuk-mcp-server

This server provides MCP tools for live editing of design tokens. A token
document is parsed into components with variant axes and editable
properties; edits are stored as inline overrides and resolved through
reference chains without ever mixing theme modes.

The server provides tools for:
- Loading token documents and switching theme modes
- Introspecting components (variants, properties, label tree)
- Reading, setting and resolving variables
- Resetting all overrides of the session
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_tokens.document import DocumentLoader
from chuk_mcp_tokens.editor import TokenEditor
from chuk_mcp_tokens.tools import (
    register_document_tools,
    register_structure_tools,
    register_variable_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-tokens")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
TOKENS_DIR = BASE_PATH / "tokens"
LIBRARY_PATH = Path(__file__).parent / "document" / "library"
DEFAULT_DOCUMENT = "ui-kit"

# Create the session
document_loader = DocumentLoader(library_path=LIBRARY_PATH, project_path=TOKENS_DIR)
editor = TokenEditor()

initial_document = document_loader.get_document(DEFAULT_DOCUMENT)
if initial_document is not None:
    editor.load_document(initial_document)

# Register all tools
document_tools = register_document_tools(mcp, editor, document_loader)
structure_tools = register_structure_tools(mcp, editor)
variable_tools = register_variable_tools(mcp, editor)

# Export tool functions for direct access
tokens_list_documents = document_tools["tokens_list_documents"]
tokens_load_document = document_tools["tokens_load_document"]
tokens_switch_mode = document_tools["tokens_switch_mode"]

tokens_list_components = structure_tools["tokens_list_components"]
tokens_parse_component = structure_tools["tokens_parse_component"]
tokens_component_defaults = structure_tools["tokens_component_defaults"]
tokens_component_tree = structure_tools["tokens_component_tree"]
tokens_variable_name = structure_tools["tokens_variable_name"]

tokens_get_variable = variable_tools["tokens_get_variable"]
tokens_set_variable = variable_tools["tokens_set_variable"]
tokens_remove_variable = variable_tools["tokens_remove_variable"]
tokens_resolve_variable = variable_tools["tokens_resolve_variable"]
tokens_component_variables = variable_tools["tokens_component_variables"]
tokens_reset_variables = variable_tools["tokens_reset_variables"]

logger.info("CHUK Tokens MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Tokens dir: {TOKENS_DIR}")
logger.info(f"  Mode: {editor.mode}")
