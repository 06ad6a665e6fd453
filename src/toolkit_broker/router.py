"""Broker meta-tools registered with the FastMCP server.

Instead of exposing every provider tool directly (which overwhelms LLM
context windows), the server exposes seven meta-tools:
  - toolkit_list_categories
  - toolkit_list_tools
  - toolkit_list_subcategories
  - toolkit_get_tool_schema
  - toolkit_discover
  - toolkit_call
  - toolkit_health_check

The LLM discovers tools on demand and runs them through toolkit_call.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastmcp import FastMCP

from .broker import BrokerHandlers, ToolExecutor
from .exceptions import ToolkitBrokerError
from .logging_config import create_logger, request_id_ctx

logger = create_logger(__name__)


def _category_hint(broker: BrokerHandlers) -> str:
    names = [c.name for c in broker.registry.get_categories() if c.enabled]
    return ", ".join(names) if names else "none registered"


def register_broker_tools(mcp: FastMCP, broker: BrokerHandlers, execute_tool: ToolExecutor) -> None:
    """Register the broker meta-tools with the FastMCP server."""
    categories = _category_hint(broker)

    @mcp.tool(
        name="toolkit_list_categories",
        description=(
            "List all available integration categories with descriptions and tool counts. "
            f"Currently available: {categories}"
        ),
    )
    def toolkit_list_categories(include_disabled: bool = False) -> dict[str, Any]:
        return broker.list_categories(include_disabled=include_disabled)

    @mcp.tool(
        name="toolkit_list_tools",
        description=(
            "List tools in a category (names and descriptions only, no schemas). "
            'Optionally filter by subcategory (e.g. "gmail", "drive" for google-workspace). '
            f"Categories: {categories}"
        ),
    )
    def toolkit_list_tools(
        category: str,
        subcategory: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        return broker.list_tools(category, subcategory=subcategory, limit=limit, offset=offset)

    @mcp.tool(
        name="toolkit_list_subcategories",
        description=(
            "List subcategories within a category, e.g. Gmail, Drive and Calendar "
            "within google-workspace."
        ),
    )
    def toolkit_list_subcategories(category: str) -> dict[str, Any]:
        return broker.list_subcategories(category)

    @mcp.tool(
        name="toolkit_get_tool_schema",
        description=(
            "Get the full input schema of one tool. Use this before toolkit_call "
            "to learn which arguments a tool accepts."
        ),
    )
    def toolkit_get_tool_schema(category: str, tool_name: str) -> dict[str, Any]:
        return broker.get_tool_schema(category, tool_name)

    @mcp.tool(
        name="toolkit_discover",
        description=(
            "Search tools by keyword across all categories "
            '(e.g. "send email", "invoice", "dns record"). Returns ranked matches.'
        ),
    )
    def toolkit_discover(query: str, limit: int = 20) -> dict[str, Any]:
        return broker.discover(query, limit=limit)

    @mcp.tool(
        name="toolkit_call",
        description=(
            "Execute any tool from any category server-side. Provide the category, "
            "the tool name and the arguments as a JSON object."
        ),
    )
    async def toolkit_call(
        category: str,
        tool_name: str,
        arguments: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        token = request_id_ctx.set(uuid.uuid4().hex[:12])
        try:
            return await broker.call(category, tool_name, arguments, execute_tool)
        except ToolkitBrokerError as e:
            logger.warning("toolkit_call failed: %s", e.message)
            return e.to_dict()
        except Exception as e:
            logger.exception("Tool %s in %s failed", tool_name, category)
            return {
                "error": True,
                "error_type": e.__class__.__name__,
                "message": f"Tool {tool_name} failed: {e}",
            }
        finally:
            request_id_ctx.reset(token)

    @mcp.tool(
        name="toolkit_health_check",
        description=(
            "Check server health: validates every registered tool name and schema "
            "and reports invalid entries and per-category counts."
        ),
    )
    def toolkit_health_check() -> dict[str, Any]:
        return broker.health_check()
