# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for tool call extraction."""

from toolchat.extract import extract_tool_calls
from toolchat.models import StopSignal, ToolInvocation


def test_none_response_yields_nothing():
    assert extract_tool_calls(None) == []


def test_text_only_response_yields_nothing(reply):
    assert extract_tool_calls(reply("just text")) == []


def test_keeps_order(reply, tool_call):
    first = tool_call(id="a", name="get_weather")
    second = tool_call(id="b", name="get_stock_price", arguments={"symbol": "AAPL"})
    resp = reply("thinking out loud", first, second, stop=StopSignal.TOOL_REQUESTED)
    assert extract_tool_calls(resp) == [first, second]


def test_drops_malformed_invocations(reply, tool_call):
    good = tool_call(id="ok")
    resp = reply(
        ToolInvocation(id="", name="get_weather", arguments={}),
        ToolInvocation(id="x", name="", arguments={}),
        ToolInvocation(id="y", name="bad name", arguments={}),
        ToolInvocation(id="z", name="get_weather"),
        good,
        stop=StopSignal.TOOL_REQUESTED,
    )
    assert extract_tool_calls(resp) == [good]


def test_empty_arguments_object_is_usable(reply, tool_call):
    call = tool_call(arguments={})
    assert extract_tool_calls(reply(call, stop=StopSignal.TOOL_REQUESTED)) == [call]
