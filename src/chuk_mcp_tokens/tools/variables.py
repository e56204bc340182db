"""
Variable tools - MCP tools for reading, editing and resolving variables.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.constants import ErrorMessages, SuccessMessages
from chuk_mcp_tokens.editor import TokenEditor

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_variable_tools(mcp: ChukMCPServer, editor: TokenEditor) -> dict[str, Any]:
    """
    Register variable tools with the MCP server.

    Args:
        mcp: The MCP server instance
        editor: The editor session

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_get_variable(name: str) -> str:
        """
        Get the raw value of a variable.

        Shows the inline override and the document default separately.

        Args:
            name: Canonical variable name (e.g. "--ds-tokens-size-4x")

        Returns:
            JSON string with effective, override and default values

        Example:
            tokens_get_variable(name="--ds-tokens-size-4x")
        """
        try:
            value = editor.store.get(name)
            if value is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.VARIABLE_NOT_FOUND.format(name=name)}
                )
            return json.dumps(
                {
                    "status": "success",
                    "name": name,
                    "value": value,
                    "override": editor.store.get_override(name),
                    "default": editor.store.get_default(name),
                }
            )
        except Exception as e:
            logger.exception("Failed to get variable")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_get_variable"] = tokens_get_variable

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_set_variable(name: str, value: str) -> str:
        """
        Set an inline override for a variable.

        Listeners are notified on the next tick. Brand variables only
        accept references; slash token names such as "color/gray/100"
        are converted automatically.

        Args:
            name: Canonical variable name
            value: New value, a literal or a reference ("var(--x)", "{tokens.size.4x}")

        Returns:
            JSON string with the stored and resolved values

        Example:
            tokens_set_variable(
                name="--ds-themes-light-ui-kit-components-button-properties-border-radius",
                value="{tokens.size.2x}"
            )
        """
        try:
            if not editor.edit(name, value):
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.REJECTED_VALUE.format(name=name, value=value),
                    }
                )
            stored = editor.store.get_override(name)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.VARIABLE_SET.format(name=name, value=stored),
                    "value": stored,
                    "resolved": editor.resolve(name),
                }
            )
        except Exception as e:
            logger.exception("Failed to set variable")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_set_variable"] = tokens_set_variable

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_remove_variable(name: str) -> str:
        """
        Remove the inline override of a variable.

        The document default becomes effective again.

        Args:
            name: Canonical variable name

        Returns:
            JSON string with the now-effective value

        Example:
            tokens_remove_variable(name="--ds-tokens-size-4x")
        """
        try:
            editor.remove(name)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.VARIABLE_REMOVED.format(name=name),
                    "value": editor.store.get(name),
                }
            )
        except Exception as e:
            logger.exception("Failed to remove variable")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_remove_variable"] = tokens_remove_variable

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_resolve_variable(name: str, mode: str | None = None) -> str:
        """
        Resolve a variable through its reference chain.

        Resolution never crosses modes: a name bound to another mode
        resolves to nothing.

        Args:
            name: Canonical variable name
            mode: Mode to resolve for; the session mode if omitted

        Returns:
            JSON string with the raw and resolved values

        Example:
            tokens_resolve_variable(name="--ds-themes-light-brand-palettes-primary")
        """
        try:
            resolved = editor.store.resolve(name, mode or editor.mode)
            if resolved is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.VARIABLE_NOT_FOUND.format(name=name)}
                )
            return json.dumps(
                {
                    "status": "success",
                    "name": name,
                    "raw": editor.store.get(name),
                    "resolved": resolved,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to resolve variable")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_resolve_variable"] = tokens_resolve_variable

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_component_variables(
        component: str,
        selected: dict[str, str] | None = None,
        layer: str | None = None,
    ) -> str:
        """
        Get the current values of a component for a variant selection.

        Args:
            component: Component name
            selected: Axis -> option (e.g. {"size": "small"}); missing axes use their first option
            layer: Only keep layered color properties of this layer (e.g. "layer-0")

        Returns:
            JSON string with resolved variables

        Example:
            tokens_component_variables(component="button", selected={"style": "outline"})
        """
        try:
            if editor.document is None:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_DOCUMENT})
            variables = editor.variables_for_variants(component, selected, layer)
            return json.dumps(
                {
                    "status": "success",
                    "component": component,
                    "variables": [v.model_dump() for v in variables],
                    "count": len(variables),
                }
            )
        except Exception as e:
            logger.exception("Failed to read component variables")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_component_variables"] = tokens_component_variables

    @mcp.tool  # type: ignore[arg-type]
    async def tokens_reset_variables() -> str:
        """
        Clear every inline override made in this session.

        Returns:
            JSON string with the number of overrides cleared

        Example:
            tokens_reset_variables()
        """
        try:
            count = editor.reset()
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.VARIABLES_RESET.format(count=count),
                    "count": count,
                }
            )
        except Exception as e:
            logger.exception("Failed to reset variables")
            return json.dumps({"status": "error", "message": str(e)})

    tools["tokens_reset_variables"] = tokens_reset_variables

    return tools
