"""Tests for keyword discovery ranking."""

from __future__ import annotations

import pytest

from toolkit_broker.registry import ToolRegistry, ToolSchema


def _tool(name: str, description: str) -> ToolSchema:
    return ToolSchema(name=name, description=description)


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry()
    reg.bulk_register_tools(
        [
            _tool("billing_sync", "Sync invoices from Stripe into the ledger"),
            _tool("stripe_customer_create", "Create a customer"),
            _tool("stripe", "Raw API access"),
            _tool("resend_send_email", "Send a transactional email"),
            _tool("twilio_send_sms", "Send an SMS message"),
            _tool("gmail_send_message", "Send an email message"),
        ]
    )
    reg.finalize()
    return reg


class TestScoring:
    def test_exact_beats_prefix_beats_description(self, registry: ToolRegistry) -> None:
        results = registry.search_tools("stripe")
        names = [r.tool.name for r in results]
        assert names == ["stripe", "stripe_customer_create", "billing_sync"]

    def test_weights(self, registry: ToolRegistry) -> None:
        by_name = {r.tool.name: r for r in registry.search_tools("stripe")}
        # exact name 100 + category display name "Stripe" 10
        assert by_name["stripe"].score == 110
        assert by_name["stripe"].matched == ("name", "category")
        # name contains 50 + category 10
        assert by_name["stripe_customer_create"].score == 60
        # description only
        assert by_name["billing_sync"].score == 20
        assert by_name["billing_sync"].matched == ("description",)

    def test_case_insensitive(self, registry: ToolRegistry) -> None:
        assert [r.tool.name for r in registry.search_tools("  STRIPE ")] == [
            r.tool.name for r in registry.search_tools("stripe")
        ]

    def test_category_display_name_match(self, registry: ToolRegistry) -> None:
        results = registry.search_tools("workspace")
        assert [r.tool.name for r in results] == ["gmail_send_message"]
        assert results[0].score == 10
        assert results[0].matched == ("category",)


class TestOrdering:
    def test_ties_keep_registration_order(self, registry: ToolRegistry) -> None:
        results = registry.search_tools("send")
        assert [r.tool.name for r in results] == [
            "resend_send_email",
            "twilio_send_sms",
            "gmail_send_message",
        ]
        # "Resend" display name also contains "send"
        assert [r.score for r in results] == [80, 70, 70]

    def test_deterministic(self, registry: ToolRegistry) -> None:
        first = registry.search_tools("e")
        second = registry.search_tools("e")
        assert first == second

    def test_limit(self, registry: ToolRegistry) -> None:
        assert len(registry.search_tools("send", limit=2)) == 2

    def test_limit_clamped(self, registry: ToolRegistry) -> None:
        assert len(registry.search_tools("send", limit=0)) == 1
        assert len(registry.search_tools("send", limit=-5)) == 1


class TestEdgeCases:
    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query(self, registry: ToolRegistry, query: str) -> None:
        assert registry.search_tools(query) == []

    def test_no_match(self, registry: ToolRegistry) -> None:
        assert registry.search_tools("kubernetes") == []

    def test_disabled_categories_excluded_on_request(self) -> None:
        reg = ToolRegistry(disabled_categories=["twilio"])
        reg.bulk_register_tools([_tool("twilio_send_sms", "Send SMS")])
        assert len(reg.search_tools("sms")) == 1
        assert reg.search_tools("sms", include_disabled=False) == []

    def test_malformed_fields_do_not_break_search(self) -> None:
        reg = ToolRegistry()
        reg.bulk_register_tools([ToolSchema.from_dict({"name": "acme_ping"})])
        assert [r.tool.name for r in reg.search_tools("ping")] == ["acme_ping"]
