"""Broker handlers — the meta-operations the transport layer exposes.

Instead of loading hundreds of provider tool schemas into the LLM context,
the client sees a handful of broker operations:
  - list categories / list tools / list subcategories
  - get one tool's full schema
  - discover tools by keyword
  - call a tool through a host-supplied executor
  - health check

Everything except ``call`` is a pure read of the registry. ``call`` confirms
the tool exists and hands execution to the executor; provider logic never
lives here.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from .constants import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    MAX_LIST_LIMIT,
    SERVER_NAME,
    SERVER_VERSION,
)
from .exceptions import ToolNotFoundError
from .health import HealthReport, toolkit_health
from .logging_config import create_logger
from .registry import ToolMatch, ToolRegistry

logger = create_logger(__name__)

ToolExecutor = Callable[[str, dict[str, Any]], Any]
HealthCheck = Callable[[Iterable[ToolMatch]], HealthReport]


def _clamp(value: Any, default: int, minimum: int, maximum: int | None = None) -> int:
    """Coerce a pagination argument into range instead of failing."""
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number


class BrokerHandlers:
    """Stateless facade over one :class:`ToolRegistry`."""

    def __init__(
        self,
        registry: ToolRegistry,
        health_check: HealthCheck | None = None,
        server_name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
    ) -> None:
        self._registry = registry
        self._health_check = health_check or toolkit_health
        self._server_name = server_name
        self._version = version

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def _available_categories(self) -> list[str]:
        return [c.name for c in self._registry.get_categories() if c.enabled]

    def list_categories(self, include_disabled: bool = False) -> dict[str, Any]:
        """All categories with display names, descriptions and tool counts."""
        categories = [
            c for c in self._registry.get_categories() if include_disabled or c.enabled
        ]
        return {
            "categories": [c.to_dict() for c in categories],
            "total_categories": len(categories),
            "total_tools": self._registry.get_total_tool_count(),
        }

    def list_tools(
        self,
        category: str,
        subcategory: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """One page of ``{name, description}`` entries for a category.

        Args:
            category: Category key from list_categories.
            subcategory: Optional subcategory filter (e.g. 'gmail').
            limit: Page size, clamped to 1..500 (default 50).
            offset: Start index; negative values are treated as 0.
        """
        limit = _clamp(limit, DEFAULT_LIST_LIMIT, 1, MAX_LIST_LIMIT)
        offset = _clamp(offset, 0, 0)

        if subcategory:
            tools = self._registry.list_tools_in_subcategory(category, subcategory)
        else:
            tools = self._registry.list_tools_in_category(category)

        result: dict[str, Any] = {
            "category": category,
            "subcategory": subcategory or None,
            "tools": tools[offset : offset + limit],
            "total": len(tools),
            "limit": limit,
            "offset": offset,
            "has_more": offset + limit < len(tools),
        }
        if not self._registry.has_category(category):
            result["error"] = (
                f"Unknown category: {category!r}. "
                f"Available categories: {', '.join(self._available_categories())}"
            )
        return result

    def list_subcategories(self, category: str) -> dict[str, Any]:
        subcategories = self._registry.get_subcategories(category)
        return {
            "category": category,
            "subcategories": subcategories,
            "total": len(subcategories),
        }

    def get_tool_schema(self, category: str, tool_name: str) -> dict[str, Any]:
        """Full schema of one tool, or a not-found payload."""
        tool = self._registry.get_tool_schema(category, tool_name)
        if tool is None:
            return {
                "category": category,
                "tool_name": tool_name,
                "found": False,
                "error": (
                    f"Tool not found: {tool_name!r} in category {category!r}."
                    " Use toolkit_discover or toolkit_list_tools to find tools."
                ),
            }
        return {"category": category, "found": True, "tool": tool.to_dict()}

    def discover(self, query: str, limit: int | None = None) -> dict[str, Any]:
        """Keyword search across all enabled categories."""
        limit = _clamp(limit, DEFAULT_SEARCH_LIMIT, 1)
        results = self._registry.search_tools(query, limit=limit, include_disabled=False)
        return {
            "query": query,
            "results": [
                {
                    "category": r.category,
                    "name": r.tool.name,
                    "description": r.tool.description,
                    "score": r.score,
                    "matched": list(r.matched),
                }
                for r in results
            ],
            "total": len(results),
            "limit": limit,
        }

    async def call(
        self,
        category: str,
        tool_name: str,
        arguments: dict[str, Any] | None,
        execute_tool: ToolExecutor,
    ) -> dict[str, Any]:
        """Run a registered tool through the host-supplied executor.

        The executor receives the resolved full tool name and the arguments
        as given; its result is returned unmodified under ``result``. Executor
        exceptions propagate untouched.

        Raises:
            ToolNotFoundError: The tool is not registered. The executor is not called.
        """
        full_name = self._registry.full_tool_name(category, tool_name)
        info = self._registry.get_category(category)
        if full_name is None or info is None:
            logger.warning("Call to unknown tool %r in category %r", tool_name, category)
            raise ToolNotFoundError(category, tool_name)

        logger.info("Executing %s", full_name)
        result = execute_tool(full_name, arguments if arguments is not None else {})
        if inspect.isawaitable(result):
            result = await result
        return {
            "category": info.name,
            "tool_name": tool_name,
            "full_name": full_name,
            "result": result,
        }

    def health_check(self) -> dict[str, Any]:
        """Schema-validity scan over all registered tools plus server status."""
        report = self._health_check(self._registry.all_tools())
        result = report.to_dict()
        result.update(
            {
                "status": "healthy" if report.invalid_count == 0 else "degraded",
                "server": self._server_name,
                "version": self._version,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "phase": self._registry.phase.value,
                "registry_categories": [
                    {"name": c.name, "enabled": c.enabled, "tool_count": c.tool_count}
                    for c in self._registry.get_categories()
                ],
            }
        )
        return result
