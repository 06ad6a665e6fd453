"""Structural validation of tool schemas.

Checks only the shape MCP clients rely on:
- Tool names (string, ``^[A-Za-z0-9._-]{1,64}$``)
- Input schemas (mapping with a string ``type``, optional ``properties``
  mapping and ``required`` list of strings)
- Descriptions (non-empty string)

Provider-specific parameter semantics are never checked here.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .constants import TOOL_NAME_PATTERN

_NAME_RE = re.compile(TOOL_NAME_PATTERN)


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> ValidationResult:
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


def validate_tool_name(name: Any) -> ValidationResult:
    """Validate a tool name.

    Args:
        name: The tool name to validate.

    Returns:
        ValidationResult with the name or error.
    """
    if not name or not isinstance(name, str):
        return ValidationResult.failure("missing or invalid name")
    if not _NAME_RE.fullmatch(name):
        return ValidationResult.failure(f"name doesn't match {TOOL_NAME_PATTERN}")
    return ValidationResult.success(name)


def validate_input_schema(schema: Any) -> ValidationResult:
    """Validate the structural shape of an input schema.

    Args:
        schema: The ``inputSchema`` value of a tool.

    Returns:
        ValidationResult with the schema or error.
    """
    if not isinstance(schema, Mapping):
        return ValidationResult.failure("missing or invalid inputSchema")

    if not isinstance(schema.get("type"), str):
        return ValidationResult.failure("inputSchema.type must be a string")

    properties = schema.get("properties")
    if properties is not None and not isinstance(properties, Mapping):
        return ValidationResult.failure("inputSchema.properties must be an object")

    required = schema.get("required")
    if required is not None:
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            return ValidationResult.failure("inputSchema.required must be a list of strings")

    return ValidationResult.success(schema)


def validate_description(description: Any) -> ValidationResult:
    if not description or not isinstance(description, str):
        return ValidationResult.failure("missing or invalid description")
    return ValidationResult.success(description)


def validate_tool(tool: Any) -> ValidationResult:
    """Validate a tool object, reporting the first failed check.

    Order: object shape, name, input schema, description.
    """
    if not isinstance(tool, Mapping):
        return ValidationResult.failure("not an object")

    for result in (
        validate_tool_name(tool.get("name")),
        validate_input_schema(tool.get("inputSchema")),
        validate_description(tool.get("description")),
    ):
        if not result.valid:
            return result
    return ValidationResult.success(tool)
