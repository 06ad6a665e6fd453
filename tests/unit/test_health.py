"""Tests for the toolkit health check and schema validation."""

from __future__ import annotations

from typing import Any

import pytest

from toolkit_broker.health import toolkit_health
from toolkit_broker.registry import ToolSchema
from toolkit_broker.validation import (
    validate_description,
    validate_input_schema,
    validate_tool,
    validate_tool_name,
)

GOOD_SCHEMA = {"type": "object", "properties": {"to": {"type": "string"}}, "required": ["to"]}


class TestValidateToolName:
    @pytest.mark.parametrize("name", ["stripe_customer_create", "a", "docs.search-v2", "x" * 64])
    def test_valid(self, name: str) -> None:
        assert validate_tool_name(name).valid

    @pytest.mark.parametrize("name", [None, "", 12, "has space", "x" * 65, "emoji✓", "acme_send\n"])
    def test_invalid(self, name: Any) -> None:
        result = validate_tool_name(name)
        assert not result.valid
        assert result.error


class TestValidateInputSchema:
    def test_valid(self) -> None:
        assert validate_input_schema(GOOD_SCHEMA).valid
        assert validate_input_schema({"type": "object"}).valid

    @pytest.mark.parametrize(
        ("schema", "fragment"),
        [
            (None, "missing or invalid inputSchema"),
            ("object", "missing or invalid inputSchema"),
            ({}, "type"),
            ({"type": 1}, "type"),
            ({"type": "object", "properties": []}, "properties"),
            ({"type": "object", "required": "to"}, "required"),
            ({"type": "object", "required": ["to", 3]}, "required"),
        ],
    )
    def test_invalid(self, schema: Any, fragment: str) -> None:
        result = validate_input_schema(schema)
        assert not result.valid
        assert fragment in (result.error or "")


class TestValidateTool:
    def test_description_required(self) -> None:
        assert not validate_description("").valid
        assert not validate_description(None).valid

    def test_first_failure_reported(self) -> None:
        result = validate_tool({"name": "bad name", "inputSchema": None})
        assert result.error == "name doesn't match ^[A-Za-z0-9._-]{1,64}$"

    def test_not_an_object(self) -> None:
        assert validate_tool(["stripe"]).error == "not an object"


class TestToolkitHealth:
    def test_all_valid(self) -> None:
        tools = [
            ToolSchema("stripe_customer_create", "Create", GOOD_SCHEMA),
            ToolSchema("gmail_send_message", "Send", GOOD_SCHEMA),
        ]
        report = toolkit_health(tools)
        assert report.total == 2
        assert report.valid == 2
        assert report.invalid_count == 0
        assert report.sample_invalid == []
        assert report.categories == {"stripe": 1, "google-workspace": 1}

    def test_mixed_inputs(self) -> None:
        tools: list[Any] = [
            ToolSchema("resend_send_email", "Send", GOOD_SCHEMA),
            {"name": "twilio_send_sms", "inputSchema": GOOD_SCHEMA},
            "not a tool",
            ToolSchema.from_dict({"name": "acme_thing", "description": "x"}),
        ]
        report = toolkit_health(tools).to_dict()
        assert report["total"] == 4
        assert report["invalid_count"] == 3
        assert report["sample_invalid"] == [
            {"index": 1, "name": "twilio_send_sms", "reason": "missing or invalid description"},
            {"index": 2, "name": None, "reason": "not an object"},
            {"index": 3, "name": "acme_thing", "reason": "missing or invalid inputSchema"},
        ]
        assert report["categories"]["unknown"] == 1

    def test_sample_capped(self) -> None:
        tools = [{"name": f"bad name {i}"} for i in range(30)]
        report = toolkit_health(tools)
        assert report.invalid_count == 30
        assert len(report.sample_invalid) == 20
        assert len(toolkit_health(tools, sample_size=5).sample_invalid) == 5

    def test_unhashable_name_reported_after_registration(self) -> None:
        from toolkit_broker.catalog import build_registry, parse_catalog

        registry = build_registry(
            parse_catalog(
                [
                    {"name": ["stripe_x"], "description": "bad", "inputSchema": GOOD_SCHEMA},
                    {"name": "stripe_ok", "description": "ok", "inputSchema": GOOD_SCHEMA},
                ]
            )
        )
        report = toolkit_health(registry.all_tools())
        assert report.total == 2
        assert report.sample_invalid[0].name == ["stripe_x"]
        assert report.sample_invalid[0].reason == "missing or invalid name"

    def test_matches_counted_under_registered_category(self) -> None:
        from toolkit_broker.registry import ToolRegistry

        registry = ToolRegistry()
        registry.register_tool("acme", ToolSchema("ping", "Ping", GOOD_SCHEMA))
        assert toolkit_health(registry.all_tools()).categories == {"acme": 1}
