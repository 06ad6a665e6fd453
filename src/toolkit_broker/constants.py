"""Global constants for the toolkit broker."""

# Category naming
CATEGORY_SEPARATOR = "_"
"""Separator between the category prefix and the action in a tool name."""

UNKNOWN_CATEGORY = "unknown"
"""Category assigned to tools whose name is missing or not a string."""

# Listing / pagination
DEFAULT_LIST_LIMIT = 50
"""Default page size for list-tools."""

MAX_LIST_LIMIT = 500
"""Upper bound for a list-tools page."""

# Discovery
DEFAULT_SEARCH_LIMIT = 20
"""Default number of ranked results returned by search."""

SCORE_EXACT_NAME = 100
SCORE_NAME_CONTAINS = 50
SCORE_DESCRIPTION_CONTAINS = 20
SCORE_CATEGORY_CONTAINS = 10

# Health check
TOOL_NAME_PATTERN = r"^[A-Za-z0-9._-]{1,64}$"
"""Tool names accepted by MCP clients."""

HEALTH_SAMPLE_SIZE = 20
"""Maximum number of invalid entries included in a health report."""

# Server identity
SERVER_NAME = "toolkit-broker"
SERVER_VERSION = "1.0.0"
