"""Toolkit broker — on-demand discovery and invocation of provider API tools over MCP."""

from .broker import BrokerHandlers
from .categories import extract_category, extract_subcategory
from .exceptions import ToolkitBrokerError, ToolNotFoundError
from .registry import CategoryInfo, RegistryPhase, SearchResult, ToolRegistry, ToolSchema

__all__ = [
    "BrokerHandlers",
    "CategoryInfo",
    "RegistryPhase",
    "SearchResult",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolSchema",
    "ToolkitBrokerError",
    "extract_category",
    "extract_subcategory",
]
