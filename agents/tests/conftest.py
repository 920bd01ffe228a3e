# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared test fixtures for Toolchat tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from toolchat.config import ChatConfig
from toolchat.models import (
    EndpointResponse,
    SamplingConfig,
    StopSignal,
    TextContent,
    ToolDeclaration,
    ToolInvocation,
    Usage,
)


class ScriptedEndpoint:
    """Endpoint double that replays canned responses and records each request."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    async def send(self, transcript, declarations, policy, sampling) -> EndpointResponse:
        self.calls.append({
            "transcript": tuple(transcript),
            "declarations": tuple(declarations),
            "policy": policy,
            "sampling": sampling,
        })
        if not self.responses:
            raise AssertionError("endpoint called more often than scripted")
        nxt = self.responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


@pytest.fixture
def config() -> ChatConfig:
    """Test config with dummy values."""
    return ChatConfig(
        api_key="test-key",
        api_url="http://localhost:8080/v1/messages",
        model="test-model",
        max_tokens=256,
        request_timeout=10,
        max_retries=3,
        retry_delay=0,
    )


@pytest.fixture
def sampling() -> SamplingConfig:
    return SamplingConfig(model="test-model", max_tokens=256)


@pytest.fixture
def weather_tool() -> ToolDeclaration:
    return ToolDeclaration.model_validate({
        "name": "get_weather",
        "description": "Gets current weather for a specified location",
        "input_schema": {
            "type": "object",
            "properties": {"location": {"type": "string", "description": "City"}},
            "required": ["location"],
        },
    })


@pytest.fixture
def stock_tool() -> ToolDeclaration:
    return ToolDeclaration.model_validate({
        "name": "get_stock_price",
        "description": "Gets current stock price",
        "input_schema": {
            "type": "object",
            "properties": {"symbol": {"type": "string"}},
            "required": ["symbol"],
        },
    })


@pytest.fixture
def tool_call() -> Callable[..., ToolInvocation]:
    def make(id: str = "toolu_1", name: str = "get_weather", arguments: Any = None) -> ToolInvocation:
        return ToolInvocation(
            id=id,
            name=name,
            arguments={"location": "Paris"} if arguments is None else arguments,
        )
    return make


@pytest.fixture
def reply() -> Callable[..., EndpointResponse]:
    """Build an endpoint response from content items or plain strings."""
    def make(*items: Any, stop: StopSignal = StopSignal.END_OF_TURN) -> EndpointResponse:
        content = tuple(TextContent(text=i) if isinstance(i, str) else i for i in items)
        return EndpointResponse(
            id="msg_test",
            model="test-model",
            content=content,
            stop_reason=stop,
            usage=Usage(input_tokens=10, output_tokens=5),
        )
    return make


@pytest.fixture
def scripted() -> Callable[[list[Any]], ScriptedEndpoint]:
    return ScriptedEndpoint
