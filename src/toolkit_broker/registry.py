"""Tool registry — in-memory catalog of provider tool schemas, indexed by category.

The registry knows about tools; it never runs them. Tools are registered once
during startup (the *building* phase), after which :meth:`ToolRegistry.finalize`
refreshes derived metadata and moves the registry to the *serving* phase, where
it is read-only and safe for any number of concurrent readers.
"""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from .categories import (
    CATEGORY_METADATA,
    CategoryMetadata,
    classify_tool_name,
    default_display_name,
    extract_category,
    extract_subcategory,
    normalize_category,
)
from .constants import (
    CATEGORY_SEPARATOR,
    DEFAULT_SEARCH_LIMIT,
    SCORE_CATEGORY_CONTAINS,
    SCORE_DESCRIPTION_CONTAINS,
    SCORE_EXACT_NAME,
    SCORE_NAME_CONTAINS,
    UNKNOWN_CATEGORY,
)
from .exceptions import DuplicateToolError, RegistryFrozenError
from .logging_config import create_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = create_logger(__name__)


def _default_input_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class ToolSchema:
    """Schema of a single provider tool as exposed to the LLM client.

    Registration is permissive: fields are stored as supplied, even when
    malformed, so the health check can report them.
    """

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=_default_input_schema)
    subcategory: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ToolSchema:
        """Build a schema from an MCP-style tool object (``inputSchema`` key)."""
        input_schema = data.get("inputSchema", data.get("input_schema"))
        return cls(
            name=data.get("name"),  # type: ignore[arg-type]
            description=data.get("description"),  # type: ignore[arg-type]
            input_schema=input_schema,  # type: ignore[arg-type]
            subcategory=data.get("subcategory"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
        if self.subcategory is not None:
            result["subcategory"] = self.subcategory
        return result

    def summary(self) -> dict[str, Any]:
        """Name and description only, without the input schema."""
        return {"name": self.name, "description": self.description}


@dataclass
class CategoryInfo:
    """Display metadata and derived counts for one category."""

    name: str
    display_name: str
    description: str
    tool_count: int = 0
    enabled: bool = True
    subcategories: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "tool_count": self.tool_count,
            "enabled": self.enabled,
        }
        if self.subcategories:
            result["subcategories"] = list(self.subcategories)
        return result


class ToolMatch(NamedTuple):
    """A registered tool together with the category it lives in."""

    category: str
    tool: ToolSchema


@dataclass(frozen=True)
class SearchResult:
    """One ranked hit from :meth:`ToolRegistry.search_tools`."""

    category: str
    tool: ToolSchema
    score: int
    matched: tuple[str, ...]


class RegistryPhase(str, Enum):
    BUILDING = "building"
    SERVING = "serving"


class ToolRegistry:
    """Catalog of tool schemas grouped by category.

    Both internal maps (category -> tools, category -> info) share the same
    keys at all times. Category keys are lower-cased. Registering the same
    (category, name) twice is rejected with :class:`DuplicateToolError`.
    """

    def __init__(
        self,
        metadata: Mapping[str, CategoryMetadata] | None = None,
        disabled_categories: Iterable[str] = (),
    ) -> None:
        """Create an empty registry in the building phase.

        Args:
            metadata: Category metadata table. Defaults to ``CATEGORY_METADATA``.
            disabled_categories: Category keys to mark disabled regardless of metadata.
        """
        self._metadata = dict(CATEGORY_METADATA if metadata is None else metadata)
        self._disabled = {normalize_category(c) for c in disabled_categories}
        self._tools: dict[str, dict[str, ToolSchema]] = {}
        self._categories: dict[str, CategoryInfo] = {}
        self._order: list[ToolMatch] = []
        self._phase = RegistryPhase.BUILDING
        self._write_lock = threading.RLock()

    # ── Lifecycle ────────────────────────────────────────────────────

    @property
    def phase(self) -> RegistryPhase:
        return self._phase

    def finalize(self) -> None:
        """Refresh subcategory metadata and switch to the serving phase.

        Calling it again once serving is a no-op.
        """
        with self._write_lock:
            if self._phase is RegistryPhase.SERVING:
                return
            self.update_category_subcategories()
            self._phase = RegistryPhase.SERVING
        logger.info(
            "Tool registry serving: %d tools in %d categories",
            self.get_total_tool_count(),
            len(self._categories),
        )

    def _check_building(self) -> None:
        if self._phase is not RegistryPhase.BUILDING:
            raise RegistryFrozenError()

    # ── Registration ─────────────────────────────────────────────────

    @staticmethod
    def _key(category: str) -> str:
        key = normalize_category(category) if isinstance(category, str) else ""
        return key or UNKNOWN_CATEGORY

    def ensure_category(self, category: str) -> CategoryInfo:
        """Return the info for ``category``, creating it on first sight.

        Known keys take their metadata from the table; unknown keys get a
        title-cased display name and a generic description.
        """
        key = self._key(category)
        existing = self._categories.get(key)
        if existing is not None:
            return existing

        with self._write_lock:
            if key in self._categories:
                return self._categories[key]
            self._check_building()

            meta = self._metadata.get(key)
            if meta is not None:
                info = CategoryInfo(
                    name=key,
                    display_name=meta.display_name,
                    description=meta.description,
                    enabled=meta.enabled,
                )
            else:
                display_name = default_display_name(key)
                info = CategoryInfo(
                    name=key,
                    display_name=display_name,
                    description=f"{display_name} integration tools",
                )
                logger.warning(
                    "Auto-created category '%s' with default metadata. "
                    "Consider adding it to CATEGORY_METADATA.",
                    key,
                )
            if key in self._disabled:
                info.enabled = False

            self._tools[key] = {}
            self._categories[key] = info
            return info

    def register_tool(self, category: str, tool: ToolSchema) -> None:
        """Append ``tool`` to ``category``, creating the category if needed.

        Raises:
            DuplicateToolError: The (category, name) pair is already registered.
            RegistryFrozenError: The registry is already serving.
        """
        with self._write_lock:
            self._check_building()
            key = self._key(category)
            if isinstance(tool.name, str):
                tool_key = tool.name
            else:
                # Malformed names are still stored so the health check can report them
                tool_key = f"<invalid-name:{len(self._order)}>"
            if tool_key in self._tools.get(key, {}):
                raise DuplicateToolError(key, tool.name)

            info = self.ensure_category(key)
            tools = self._tools[key]

            if tool.subcategory is None:
                derived_category, subcategory = classify_tool_name(tool.name)
                if subcategory is not None and derived_category == key:
                    tool = dataclasses.replace(tool, subcategory=subcategory)

            tools[tool_key] = tool
            self._order.append(ToolMatch(key, tool))
            info.tool_count = len(tools)

    def bulk_register_tools(self, tools: Iterable[ToolSchema]) -> None:
        """Register provider tools, deriving each category from the tool name.

        Duplicates are skipped with a warning; the first registration wins.
        """
        registered = 0
        skipped = 0
        for tool in tools:
            try:
                self.register_tool(extract_category(tool.name), tool)
                registered += 1
            except DuplicateToolError as e:
                skipped += 1
                logger.warning("Skipping duplicate tool: %s", e.message)
        logger.info("Registered %d tools (%d duplicates skipped)", registered, skipped)

    extract_category = staticmethod(extract_category)
    extract_subcategory = staticmethod(extract_subcategory)

    def update_category_subcategories(self) -> None:
        """Recompute the cached subcategory list of every category."""
        with self._write_lock:
            for key, info in self._categories.items():
                subcategories = self.get_subcategories(key)
                info.subcategories = subcategories or None

    # ── Lookup ───────────────────────────────────────────────────────

    def _resolve(self, category: str, tool_name: str) -> ToolSchema | None:
        key = self._key(category)
        tools = self._tools.get(key)
        if not tools or not isinstance(tool_name, str):
            return None
        tool = tools.get(tool_name)
        if tool is None:
            tool = tools.get(f"{key}{CATEGORY_SEPARATOR}{tool_name}")
        return tool

    def get_tool_schema(self, category: str, tool_name: str) -> ToolSchema | None:
        """Exact lookup; ``None`` when the category or tool does not exist.

        ``tool_name`` may be the stored name or the name without its category prefix.
        """
        return self._resolve(category, tool_name)

    def has_tool(self, category: str, tool_name: str) -> bool:
        return self._resolve(category, tool_name) is not None

    def has_category(self, category: str) -> bool:
        return self._key(category) in self._categories

    def full_tool_name(self, category: str, tool_name: str) -> str | None:
        """Name handed to executors for a registered tool, or ``None``.

        Provider tool names already carry their prefix (``stripe_customer_create``,
        ``gmail_send_message``) and are returned as stored; bare names are
        prefixed with the category.
        """
        tool = self._resolve(category, tool_name)
        if tool is None:
            return None
        key = self._key(category)
        name = tool.name
        if isinstance(name, str) and (
            extract_category(name) == key or name.startswith(f"{key}{CATEGORY_SEPARATOR}")
        ):
            return name
        return f"{key}{CATEGORY_SEPARATOR}{name}"

    def get_tool_by_full_name(self, full_name: str) -> ToolMatch | None:
        """Resolve a ``category_toolname`` string.

        The split point widens one segment at a time so multi-segment category
        keys still match. Names whose prefix folds into an umbrella category
        (``gmail_send_message``) resolve through name classification.
        """
        if not isinstance(full_name, str) or not full_name:
            return None

        parts = full_name.split(CATEGORY_SEPARATOR)
        for i in range(1, len(parts)):
            key = self._key(CATEGORY_SEPARATOR.join(parts[:i]))
            tools = self._tools.get(key)
            if not tools:
                continue
            tool = tools.get(full_name) or tools.get(CATEGORY_SEPARATOR.join(parts[i:]))
            if tool is not None:
                return ToolMatch(key, tool)

        key = extract_category(full_name)
        tool = self._tools.get(key, {}).get(full_name)
        if tool is None:
            return None
        return ToolMatch(key, tool)

    # ── Listing ──────────────────────────────────────────────────────

    def get_categories(self) -> list[CategoryInfo]:
        """All categories in creation order (copies; the registry is not mutated through them)."""
        return [dataclasses.replace(info) for info in self._categories.values()]

    def get_category(self, name: str) -> CategoryInfo | None:
        info = self._categories.get(self._key(name))
        return dataclasses.replace(info) if info is not None else None

    def get_total_tool_count(self) -> int:
        return sum(len(tools) for tools in self._tools.values())

    def all_tools(self) -> list[ToolMatch]:
        """Every registered tool in global registration order."""
        return list(self._order)

    def list_tools_in_category(self, category: str) -> list[dict[str, Any]]:
        """Name and description of every tool in ``category``; empty when unknown."""
        tools = self._tools.get(self._key(category), {})
        return [tool.summary() for tool in tools.values()]

    def list_tools_in_subcategory(self, category: str, subcategory: str) -> list[dict[str, Any]]:
        tools = self._tools.get(self._key(category), {})
        return [tool.summary() for tool in tools.values() if tool.subcategory == subcategory]

    def get_subcategories(self, category: str) -> list[str]:
        """Distinct subcategories of ``category`` in first-seen order."""
        seen: dict[str, None] = {}
        for tool in self._tools.get(self._key(category), {}).values():
            if tool.subcategory:
                seen.setdefault(tool.subcategory, None)
        return list(seen)

    # ── Discovery ────────────────────────────────────────────────────

    def search_tools(
        self,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        include_disabled: bool = True,
    ) -> list[SearchResult]:
        """Rank tools by case-insensitive substring match.

        Weights per field: exact name 100, name contains 50, description
        contains 20, category display name contains 10; matched fields sum.
        Ties keep registration order.
        """
        needle = query.strip().lower() if isinstance(query, str) else ""
        if not needle:
            return []
        limit = max(1, int(limit))

        results: list[SearchResult] = []
        for category, tool in self._order:
            info = self._categories[category]
            if not include_disabled and not info.enabled:
                continue

            score = 0
            matched: list[str] = []

            name = tool.name.lower() if isinstance(tool.name, str) else ""
            if name == needle:
                score += SCORE_EXACT_NAME
                matched.append("name")
            elif needle in name:
                score += SCORE_NAME_CONTAINS
                matched.append("name")

            description = tool.description.lower() if isinstance(tool.description, str) else ""
            if needle in description:
                score += SCORE_DESCRIPTION_CONTAINS
                matched.append("description")

            if needle in info.display_name.lower():
                score += SCORE_CATEGORY_CONTAINS
                matched.append("category")

            if score:
                results.append(SearchResult(category, tool, score, tuple(matched)))

        results.sort(key=lambda r: -r.score)
        return results[:limit]
