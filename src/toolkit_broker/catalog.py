"""Tool catalogs — provider tool schemas loaded from JSON files.

A catalog file holds either a JSON list of MCP tool objects or an object
with a ``tools`` list. Entries are kept as supplied so malformed schemas
reach the registry and show up in the health check.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .exceptions import CatalogLoadError
from .logging_config import create_logger
from .registry import ToolRegistry, ToolSchema

if TYPE_CHECKING:
    from .config import Settings

logger = create_logger(__name__)


def parse_catalog(data: Any, source: str = "<memory>") -> list[ToolSchema]:
    """Convert decoded catalog JSON into tool schemas.

    Raises:
        CatalogLoadError: ``data`` is neither a list nor an object with a ``tools`` list.
    """
    if isinstance(data, Mapping):
        data = data.get("tools")
    if not isinstance(data, list):
        raise CatalogLoadError(
            f"Catalog {source} must be a list of tools or an object with a 'tools' list",
            path=source,
        )

    tools: list[ToolSchema] = []
    for index, entry in enumerate(data):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping catalog entry %d in %s: not an object", index, source)
            continue
        tools.append(ToolSchema.from_dict(entry))
    return tools


def load_catalog(path: str | Path) -> list[ToolSchema]:
    """Load one catalog file.

    Raises:
        CatalogLoadError: The file is missing, unreadable or not valid JSON.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog {path}: {e}", path=str(path)) from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(f"Invalid JSON in catalog {path}: {e}", path=str(path)) from e

    tools = parse_catalog(data, source=str(path))
    logger.info("Loaded %d tools from %s", len(tools), path)
    return tools


def load_catalogs(paths: Iterable[str | Path]) -> list[ToolSchema]:
    """Load several catalogs, concatenated in the order given."""
    tools: list[ToolSchema] = []
    for path in paths:
        tools.extend(load_catalog(path))
    return tools


def build_registry(tools: Iterable[ToolSchema], settings: Settings | None = None) -> ToolRegistry:
    """Bulk-register ``tools`` into a fresh registry and switch it to serving."""
    disabled = settings.disabled_categories if settings is not None else ()
    registry = ToolRegistry(disabled_categories=disabled)
    registry.bulk_register_tools(tools)
    registry.finalize()
    return registry
