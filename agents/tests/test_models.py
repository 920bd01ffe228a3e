# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for Pydantic models."""

import pydantic
import pytest

from toolchat.models import (
    EndpointResponse,
    Role,
    StopSignal,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolDeclaration,
    ToolInvocation,
    ToolResult,
    Turn,
    Usage,
)


class TestContentItems:
    def test_tool_invocation_wire_alias(self):
        item = ToolInvocation.model_validate(
            {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {"location": "Paris"}}
        )
        assert item.arguments == {"location": "Paris"}
        assert item.model_dump(by_alias=True)["input"] == {"location": "Paris"}

    def test_tool_invocation_tolerates_missing_fields(self):
        item = ToolInvocation.model_validate({"type": "tool_use"})
        assert item.id == ""
        assert item.name == ""
        assert item.arguments is None

    def test_tool_result_wire_names(self):
        result = ToolResult(invocation_id="toolu_1", payload="ok", is_error=True)
        dumped = result.model_dump(by_alias=True)
        assert dumped == {
            "type": "tool_result",
            "tool_use_id": "toolu_1",
            "content": "ok",
            "is_error": True,
        }

    def test_items_are_frozen(self):
        item = TextContent(text="hi")
        with pytest.raises(pydantic.ValidationError):
            item.text = "changed"


class TestTurn:
    def test_discriminated_content(self):
        turn = Turn.model_validate({
            "role": "assistant",
            "content": [
                {"type": "text", "text": "Let me check."},
                {"type": "tool_use", "id": "toolu_1", "name": "get_weather", "input": {}},
                {"type": "thinking", "thinking": "hmm", "signature": "sig"},
            ],
        })
        assert turn.role is Role.ASSISTANT
        assert isinstance(turn.content[0], TextContent)
        assert isinstance(turn.content[1], ToolInvocation)
        assert isinstance(turn.content[2], ThinkingContent)

    def test_unknown_content_type_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Turn.model_validate({"role": "user", "content": [{"type": "image"}]})

    def test_turn_is_frozen(self):
        turn = Turn(role=Role.USER, content=(TextContent(text="hi"),))
        with pytest.raises(pydantic.ValidationError):
            turn.role = Role.ASSISTANT


class TestToolChoice:
    def test_constructors(self):
        assert ToolChoice.auto().type == "auto"
        assert ToolChoice.none().type == "none"
        forced = ToolChoice.forced("get_weather", allow_parallel_calls=False)
        assert forced.type == "tool"
        assert forced.name == "get_weather"
        assert forced.allow_parallel_calls is False

    def test_unknown_type_survives_construction(self):
        assert ToolChoice(type="any").type == "any"


class TestToolDeclaration:
    def test_schema_defaults(self):
        tool = ToolDeclaration(name="t", description="d")
        assert tool.input_schema.type == "object"
        assert tool.input_schema.properties == {}
        assert tool.input_schema.required == []

    def test_extra_schema_keys_kept(self):
        tool = ToolDeclaration.model_validate({
            "name": "t",
            "description": "d",
            "input_schema": {
                "type": "object",
                "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            },
        })
        assert tool.input_schema.properties["tags"].items == {"type": "string"}


class TestEndpointResponse:
    def test_text_concatenates_text_items(self):
        resp = EndpointResponse(
            content=(
                TextContent(text="Hello "),
                ToolInvocation(id="t", name="x", arguments={}),
                TextContent(text="world"),
            ),
            stop_reason=StopSignal.END_OF_TURN,
        )
        assert resp.text == "Hello world"

    def test_stop_reason_from_wire(self):
        resp = EndpointResponse.model_validate({"stop_reason": "tool_use", "content": []})
        assert resp.stop_reason is StopSignal.TOOL_REQUESTED

    def test_usage_addition(self):
        total = Usage(input_tokens=3, output_tokens=1) + Usage(input_tokens=2, output_tokens=4)
        assert (total.input_tokens, total.output_tokens) == (5, 5)
