"""Toolkit health check — validates names and schemas of all registered tools.

Helps diagnose "NULL tools" and "invalid name" errors reported by MCP
clients. Malformed schemas never block registration; they show up here.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .categories import extract_category
from .constants import HEALTH_SAMPLE_SIZE
from .registry import ToolMatch, ToolSchema
from .validation import validate_tool


@dataclass
class InvalidTool:
    """A tool that failed validation."""

    index: int
    name: Any
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "name": self.name, "reason": self.reason}


@dataclass
class HealthReport:
    """Result of validating a list of tools."""

    total: int = 0
    valid: int = 0
    invalid_count: int = 0
    sample_invalid: list[InvalidTool] = field(default_factory=list)
    categories: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "valid": self.valid,
            "invalid_count": self.invalid_count,
            "sample_invalid": [t.to_dict() for t in self.sample_invalid],
            "categories": dict(self.categories),
        }


def toolkit_health(
    tools: Iterable[ToolMatch | ToolSchema | Mapping[str, Any] | Any],
    sample_size: int = HEALTH_SAMPLE_SIZE,
) -> HealthReport:
    """Validate every tool and return a health report.

    Args:
        tools: Registry matches, tool schemas or raw MCP tool objects, in
            registration order. Matches are counted under the category they
            were registered in; anything else under its name prefix.
        sample_size: Maximum number of invalid entries kept in the report.
    """
    report = HealthReport()
    invalid: list[InvalidTool] = []

    for index, tool in enumerate(tools):
        registered_category = None
        if isinstance(tool, ToolMatch):
            registered_category, tool = tool
        data = tool.to_dict() if isinstance(tool, ToolSchema) else tool
        name = data.get("name") if isinstance(data, Mapping) else None

        category = registered_category or extract_category(name)
        report.categories[category] = report.categories.get(category, 0) + 1
        report.total += 1

        result = validate_tool(data)
        if not result.valid:
            invalid.append(InvalidTool(index=index, name=name, reason=result.error or "invalid"))

    report.invalid_count = len(invalid)
    report.valid = report.total - report.invalid_count
    report.sample_invalid = invalid[:sample_size]
    return report
