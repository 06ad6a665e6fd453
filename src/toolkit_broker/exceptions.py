"""Exception hierarchy for the toolkit broker.

Absence of a category or tool is reported through ``None`` sentinels by the
registry. These exceptions cover the cases where proceeding is meaningless:
calling an unknown tool, writing to a finalized registry, or a collaborator
(executor, catalog, configuration) failing.
"""

from __future__ import annotations

from typing import Any


class ToolkitBrokerError(Exception):
    """Base exception for all toolkit broker errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class ToolNotFoundError(ToolkitBrokerError):
    """Raised when a call targets a (category, tool) pair that is not registered."""

    error_code = "NOT_FOUND"

    def __init__(self, category: str, tool_name: str, **kwargs: Any):
        super().__init__(
            f"Tool not found: {tool_name!r} in category {category!r}",
            "NOT_FOUND",
            category=category,
            tool_name=tool_name,
            **kwargs,
        )


class DuplicateToolError(ToolkitBrokerError):
    """Raised when the same (category, name) pair is registered twice."""

    error_code = "DUPLICATE_TOOL"

    def __init__(self, category: str, tool_name: str, **kwargs: Any):
        super().__init__(
            f"Tool {tool_name!r} is already registered in category {category!r}",
            "DUPLICATE_TOOL",
            category=category,
            tool_name=tool_name,
            **kwargs,
        )


class RegistryFrozenError(ToolkitBrokerError):
    """Raised on registration after the registry has started serving."""

    error_code = "REGISTRY_FROZEN"

    def __init__(self, message: str = "Registry is serving; registration is closed", **kwargs: Any):
        super().__init__(message, "REGISTRY_FROZEN", **kwargs)


class ToolExecutionError(ToolkitBrokerError):
    """Raised by executor collaborators when a tool execution fails."""

    error_code = "TOOL_EXECUTION_ERROR"

    def __init__(self, message: str, tool_name: str | None = None, **kwargs: Any):
        super().__init__(message, "TOOL_EXECUTION_ERROR", tool_name=tool_name, **kwargs)


class CatalogLoadError(ToolkitBrokerError):
    """Raised when a tool catalog file cannot be read or parsed."""

    error_code = "CATALOG_LOAD_ERROR"

    def __init__(self, message: str, path: str | None = None, **kwargs: Any):
        super().__init__(message, "CATALOG_LOAD_ERROR", path=path, **kwargs)


class ConfigurationError(ToolkitBrokerError):
    """Raised when an environment setting has an invalid value."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, setting: str | None = None, **kwargs: Any):
        super().__init__(message, "CONFIGURATION_ERROR", setting=setting, **kwargs)


__all__ = [
    "ToolkitBrokerError",
    "ToolNotFoundError",
    "DuplicateToolError",
    "RegistryFrozenError",
    "ToolExecutionError",
    "CatalogLoadError",
    "ConfigurationError",
]
