"""Tests for tool-name classification and the category metadata table."""

from __future__ import annotations

import pytest

from toolkit_broker.categories import (
    CATEGORY_METADATA,
    GOOGLE_WORKSPACE_CATEGORY,
    GOOGLE_WORKSPACE_PREFIXES,
    classify_tool_name,
    default_display_name,
    extract_category,
    extract_subcategory,
)


class TestClassifyToolName:
    def test_plain_prefix(self) -> None:
        assert classify_tool_name("acme_send") == ("acme", None)

    def test_prefix_is_lowercased(self) -> None:
        assert classify_tool_name("Stripe_Customer_Create") == ("stripe", None)

    @pytest.mark.parametrize(
        ("name", "subcategory"),
        [
            ("gmail_send_message", "gmail"),
            ("drive_create_file", "drive"),
            ("calendar_list_events", "calendar"),
            ("licensing_assign", "licensing"),
        ],
    )
    def test_google_workspace_prefixes(self, name: str, subcategory: str) -> None:
        assert classify_tool_name(name) == (GOOGLE_WORKSPACE_CATEGORY, subcategory)

    def test_no_separator_maps_to_itself(self) -> None:
        assert classify_tool_name("stripe") == ("stripe", None)

    def test_bare_workspace_prefix_still_folds(self) -> None:
        assert classify_tool_name("gmail") == (GOOGLE_WORKSPACE_CATEGORY, "gmail")

    @pytest.mark.parametrize("name", [None, "", "   ", 42, "_leading"])
    def test_unusable_names_are_unknown(self, name: object) -> None:
        assert classify_tool_name(name) == ("unknown", None)


class TestExtractors:
    def test_extract_category(self) -> None:
        assert extract_category("twilio_send_sms") == "twilio"
        assert extract_category("sheets_append_row") == GOOGLE_WORKSPACE_CATEGORY

    def test_extract_subcategory_only_for_umbrella(self) -> None:
        assert extract_subcategory("docs_create_document") == "docs"
        assert extract_subcategory("resend_send_email") is None


class TestMetadataTable:
    def test_umbrella_has_metadata(self) -> None:
        assert CATEGORY_METADATA[GOOGLE_WORKSPACE_CATEGORY].display_name == "Google Workspace"

    def test_prefixes_are_not_categories(self) -> None:
        # Folded prefixes never become their own category keys
        assert not GOOGLE_WORKSPACE_PREFIXES & set(CATEGORY_METADATA)

    def test_default_display_name(self) -> None:
        assert default_display_name("acme") == "Acme"
        assert default_display_name("big-query") == "Big Query"
