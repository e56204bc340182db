"""
Structure tools - MCP tools for component introspection.

Tools for listing components, parsing their variant axes and editable
properties, and building variable names.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.constants import ErrorMessages
from chuk_mcp_tokens.editor import TokenEditor
from chuk_mcp_tokens.introspection import component_tree

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_structure_tools(mcp: ChukMCPServer, editor: TokenEditor) -> dict[str, Any]:
    """
    Register structure tools with the MCP server.

    Args:
        mcp: The MCP server instance
        editor: The editor session

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def no_document() -> str:
        return json.dumps({"status": "error", "message": ErrorMessages.NO_DOCUMENT})

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_list_components() -> str:
        """
        List the components of the loaded document.

        Returns:
            JSON string with component keys

        Example:
            tokens_list_components()
        """
        try:
            if editor.document is None:
                return no_document()
            components = editor.list_components()
            return json.dumps(
                {"status": "success", "components": components, "count": len(components)}
            )
        except Exception as e:
            logger.exception("Failed to list components")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_list_components"] = tokens_list_components

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_parse_component(component: str) -> str:
        """
        Parse a component into variant axes and editable properties.

        Both the legacy "variants" wrapper shape and named category
        containers (sizes, styles, layouts...) are understood.

        Args:
            component: Component name ("Button", "segmented-control"...)

        Returns:
            JSON string with variants and property descriptors

        Example:
            tokens_parse_component(component="SegmentedControl")
        """
        try:
            if editor.document is None:
                return no_document()
            structure = editor.parse(component)
            if structure.is_empty and editor.document.component(component) is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.COMPONENT_NOT_FOUND.format(component=component),
                    }
                )
            return json.dumps({"status": "success", "structure": structure.to_dict()})
        except Exception as e:
            logger.exception("Failed to parse component")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_parse_component"] = tokens_parse_component

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_component_defaults(component: str) -> str:
        """
        Get the document values of every property of a component.

        Values are returned as written in the document, so references
        appear unresolved.

        Args:
            component: Component name

        Returns:
            JSON string mapping variable names to document values

        Example:
            tokens_component_defaults(component="button")
        """
        try:
            if editor.document is None:
                return no_document()
            defaults = editor.introspector.default_values(component)
            return json.dumps({"status": "success", "defaults": defaults, "count": len(defaults)})
        except Exception as e:
            logger.exception("Failed to read component defaults")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_component_defaults"] = tokens_component_defaults

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_component_tree() -> str:
        """
        Get the label tree of all components.

        "properties" containers are flattened into their parent and
        siblings are sorted by label.

        Returns:
            JSON string with the nested tree

        Example:
            tokens_component_tree()
        """
        try:
            if editor.document is None:
                return no_document()
            tree = component_tree(editor.document)
            return json.dumps({"status": "success", "tree": [item.to_dict() for item in tree]})
        except Exception as e:
            logger.exception("Failed to build component tree")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_component_tree"] = tokens_component_tree

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_variable_name(path: list[str], mode: str | None = None) -> str:
        """
        Build the canonical variable name for a document path.

        Args:
            path: Path segments from the document root
            mode: Theme mode; the session mode if omitted

        Returns:
            JSON string with the variable name

        Example:
            tokens_variable_name(path=["ui-kit", "components", "button", "properties", "border-radius"])
        """
        try:
            name = editor.variable_name(path, mode)
            return json.dumps({"status": "success", "variable_name": name})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to build variable name")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_variable_name"] = tokens_variable_name

    return tools
