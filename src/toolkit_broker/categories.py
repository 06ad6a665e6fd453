"""Category metadata table and tool-name classification.

Tool names follow ``<prefix>_<action...>``. The prefix is the category, except
for Google Workspace prefixes (gmail, drive, calendar, ...) which all fold
into the ``google-workspace`` umbrella category and are kept as the
subcategory.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import CATEGORY_SEPARATOR, UNKNOWN_CATEGORY


@dataclass(frozen=True)
class CategoryMetadata:
    """Static display metadata for a known category."""

    display_name: str
    description: str
    enabled: bool = True


GOOGLE_WORKSPACE_CATEGORY = "google-workspace"

GOOGLE_WORKSPACE_PREFIXES: frozenset[str] = frozenset(
    {
        "gmail",
        "drive",
        "calendar",
        "sheets",
        "docs",
        "slides",
        "tasks",
        "people",
        "forms",
        "classroom",
        "chat",
        "admin",
        "reports",
        "licensing",
    }
)

# Umbrella key -> prefixes folded into it
UMBRELLA_PREFIXES: dict[str, frozenset[str]] = {
    GOOGLE_WORKSPACE_CATEGORY: GOOGLE_WORKSPACE_PREFIXES,
}

CATEGORY_METADATA: dict[str, CategoryMetadata] = {
    "github": CategoryMetadata(
        "GitHub", "GitHub repository, issue, PR, workflow, and collaboration tools"
    ),
    "vercel": CategoryMetadata(
        "Vercel", "Vercel deployment, project, domain, and serverless platform tools"
    ),
    "neon": CategoryMetadata("Neon", "Neon serverless Postgres database management tools"),
    "upstash": CategoryMetadata(
        "Upstash Redis", "Upstash Redis database operations and management tools"
    ),
    GOOGLE_WORKSPACE_CATEGORY: CategoryMetadata(
        "Google Workspace",
        "Gmail, Drive, Calendar, Sheets, Docs, and other Google Workspace tools",
    ),
    "openai": CategoryMetadata(
        "OpenAI", "OpenAI API tools for chat, embeddings, images, audio, and fine-tuning"
    ),
    "stripe": CategoryMetadata(
        "Stripe", "Stripe payment processing, subscriptions, invoices, and billing tools"
    ),
    "supabase": CategoryMetadata(
        "Supabase", "Supabase database, authentication, storage, and edge functions tools"
    ),
    "playwright": CategoryMetadata(
        "Playwright", "Playwright browser automation and web scraping tools"
    ),
    "twilio": CategoryMetadata("Twilio", "Twilio SMS, voice, video, and messaging tools"),
    "resend": CategoryMetadata("Resend", "Resend email delivery and management tools"),
    "cloudflare": CategoryMetadata(
        "Cloudflare", "Cloudflare DNS, CDN, Workers, and security tools"
    ),
    "context7": CategoryMetadata(
        "Context7", "Context7 library documentation search and retrieval tools"
    ),
    "postgres": CategoryMetadata(
        "PostgreSQL", "PostgreSQL database with pgvector for semantic search and embeddings"
    ),
    "neo4j": CategoryMetadata(
        "Neo4j", "Neo4j graph database for knowledge graphs and relationship mapping"
    ),
    "qdrant": CategoryMetadata(
        "Qdrant", "Qdrant vector search engine for semantic similarity and embeddings"
    ),
    "n8n": CategoryMetadata("N8N", "N8N workflow automation and integration platform"),
}


def normalize_category(category: str) -> str:
    """Case-fold a category key."""
    return category.strip().lower()


def default_display_name(category: str) -> str:
    """Title-case a category key for categories missing from the metadata table."""
    words = category.replace("-", " ").replace(CATEGORY_SEPARATOR, " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words) or category


def classify_tool_name(tool_name: Any) -> tuple[str, str | None]:
    """Derive ``(category, subcategory)`` from a tool name.

    Pure function of the name string: a name with no separator is its own
    category, a name that is missing or not a string falls into ``unknown``.
    """
    if not isinstance(tool_name, str) or not tool_name.strip():
        return UNKNOWN_CATEGORY, None

    prefix = tool_name.strip().split(CATEGORY_SEPARATOR, 1)[0].lower()
    if not prefix:
        return UNKNOWN_CATEGORY, None

    for umbrella, prefixes in UMBRELLA_PREFIXES.items():
        if prefix in prefixes:
            return umbrella, prefix
    return prefix, None


def extract_category(tool_name: Any) -> str:
    """Category key for a tool name (``gmail_send`` -> ``google-workspace``)."""
    return classify_tool_name(tool_name)[0]


def extract_subcategory(tool_name: Any) -> str | None:
    """Subcategory for umbrella tool names (``drive_create_file`` -> ``drive``), else None."""
    return classify_tool_name(tool_name)[1]
