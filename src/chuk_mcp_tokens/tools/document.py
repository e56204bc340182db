"""
Document tools - MCP tools for loading token documents and switching modes.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.constants import ErrorMessages, SuccessMessages
from chuk_mcp_tokens.document import DocumentLoader
from chuk_mcp_tokens.editor import TokenEditor

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_document_tools(
    mcp: ChukMCPServer,
    editor: TokenEditor,
    loader: DocumentLoader,
) -> dict[str, Any]:
    """
    Register document tools with the MCP server.

    Args:
        mcp: The MCP server instance
        editor: The editor session
        loader: The document loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_list_documents() -> str:
        """
        List available token documents.

        Returns documents from the built-in library and the project
        tokens directory.

        Returns:
            JSON string with document names

        Example:
            tokens_list_documents()
        """
        try:
            names = loader.list_documents()
            current = editor.document.name if editor.document else None
            return json.dumps(
                {
                    "status": "success",
                    "documents": names,
                    "count": len(names),
                    "current": current,
                }
            )
        except Exception as e:
            logger.exception("Failed to list token documents")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_list_documents"] = tokens_list_documents

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_load_document(name: str, mode: str | None = None) -> str:
        """
        Load a token document into the editing session.

        Replaces the current document. Existing overrides are kept;
        they apply again as soon as their names exist in the new document.

        Args:
            name: Document name (file stem, e.g. "ui-kit")
            mode: Theme mode (e.g. "light", "dark"); default mode if omitted

        Returns:
            JSON string with the loaded document summary

        Example:
            tokens_load_document(name="ui-kit", mode="dark")
        """
        try:
            document = loader.get_document(name, mode)
            if document is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.DOCUMENT_NOT_FOUND.format(name=name)}
                )

            editor.load_document(document)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.DOCUMENT_LOADED.format(
                        name=document.name, mode=document.mode
                    ),
                    "document": {
                        "name": document.name,
                        "mode": document.mode,
                        "revision": document.revision,
                        "components": document.component_names(),
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to load token document")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_load_document"] = tokens_load_document

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_switch_mode(mode: str) -> str:
        """
        Switch the theme mode of the loaded document.

        Overrides recorded for other modes stay untouched and are not
        visible in the new mode.

        Args:
            mode: New theme mode (lowercase letters and digits)

        Returns:
            JSON string with the active mode

        Example:
            tokens_switch_mode(mode="dark")
        """
        try:
            if editor.document is None:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_DOCUMENT})

            document = editor.switch_mode(mode)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.MODE_SWITCHED.format(mode=document.mode),
                    "mode": document.mode,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to switch mode")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_switch_mode"] = tokens_switch_mode

    return tools
