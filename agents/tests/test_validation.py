# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for tool catalogue and tool-choice validation."""

import pytest

from toolchat.errors import ValidationError
from toolchat.models import ToolChoice, ToolDeclaration
from toolchat.validation import is_valid_tool_name, validate_tools


def _tool(name="get_weather", description="Weather lookup", schema=None):
    return ToolDeclaration.model_validate({
        "name": name,
        "description": description,
        "input_schema": schema or {
            "type": "object",
            "properties": {"location": {"type": "string"}},
            "required": ["location"],
        },
    })


@pytest.mark.parametrize("name", ["get_weather", "SearchInternet", "a-b_c", "x" * 64, "9"])
def test_valid_names(name):
    assert is_valid_tool_name(name)


@pytest.mark.parametrize("name", ["a b", "", "x" * 65, "weather.get", "naïve"])
def test_invalid_names(name):
    assert not is_valid_tool_name(name)


def test_valid_catalogue_passes():
    validate_tools([_tool()], ToolChoice.auto())


def test_empty_catalogue_skips_policy_check():
    validate_tools([], None)


def test_name_with_space_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_tools([_tool(name="a b")], ToolChoice.auto())
    assert exc.value.tool_name == "a b"
    assert "invalid tool name" in str(exc.value)


def test_missing_description_rejected():
    with pytest.raises(ValidationError, match="missing required description"):
        validate_tools([_tool(description="")], ToolChoice.auto())


def test_non_object_schema_rejected():
    with pytest.raises(ValidationError, match="type must be 'object'"):
        validate_tools(
            [_tool(schema={"type": "string", "properties": {"x": {"type": "string"}}})],
            ToolChoice.auto(),
        )


def test_zero_property_schema_rejected():
    with pytest.raises(ValidationError, match="at least one property"):
        validate_tools([_tool(schema={"type": "object", "properties": {}})], ToolChoice.auto())


def test_required_must_name_declared_property():
    schema = {"type": "object", "properties": {"a": {"type": "string"}}, "required": ["b"]}
    with pytest.raises(ValidationError, match="undeclared properties: b"):
        validate_tools([_tool(schema=schema)], ToolChoice.auto())


def test_duplicate_names_rejected():
    with pytest.raises(ValidationError, match="duplicate tool name"):
        validate_tools([_tool(), _tool()], ToolChoice.auto())


def test_first_violation_short_circuits():
    with pytest.raises(ValidationError) as exc:
        validate_tools([_tool(name="bad name"), _tool(name="other", description="")], ToolChoice.auto())
    assert exc.value.tool_name == "bad name"


class TestPolicy:
    def test_policy_required_when_tools_present(self):
        with pytest.raises(ValidationError, match="policy required"):
            validate_tools([_tool()], None)

    def test_none_policy_accepted(self):
        validate_tools([_tool()], ToolChoice.none())

    def test_forced_requires_name(self):
        with pytest.raises(ValidationError, match="name must be specified"):
            validate_tools([_tool()], ToolChoice(type="tool"))

    def test_forced_must_name_declared_tool(self):
        with pytest.raises(ValidationError, match="undeclared tool"):
            validate_tools([_tool()], ToolChoice.forced("get_stock_price"))

    def test_forced_declared_tool_accepted(self):
        validate_tools([_tool()], ToolChoice.forced("get_weather"))

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError, match="unknown policy type"):
            validate_tools([_tool()], ToolChoice(type="any"))
