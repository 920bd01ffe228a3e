# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Toolchat — a tool-calling conversation loop for the Messages API."""

__version__ = "0.1.0"

from .config import ChatConfig
from .agent import ToolAgent
from .errors import (
    ConfigurationError,
    IterationLimitExceeded,
    ProtocolViolation,
    SessionClosed,
    ToolchatError,
    TranscriptError,
    TransportError,
    ValidationError,
)
from .extract import extract_tool_calls
from .llm import AnthropicEndpoint, Endpoint
from .session import ChatSession, SessionState, run_session
from .tools import HandlerRegistry, ToolContext, dispatch_tool_call
from .transcript import Transcript
from .validation import validate_tools
from .models import (
    EndpointResponse,
    InputSchema,
    Property,
    Role,
    SamplingConfig,
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

__all__ = [
    # Loop
    "ChatSession",
    "SessionState",
    "run_session",
    "Transcript",
    "validate_tools",
    "extract_tool_calls",
    "dispatch_tool_call",
    "HandlerRegistry",
    "ToolContext",
    # Endpoint
    "Endpoint",
    "AnthropicEndpoint",
    # Agent framework
    "ToolAgent",
    # Config
    "ChatConfig",
    # Errors
    "ToolchatError",
    "ValidationError",
    "TransportError",
    "ProtocolViolation",
    "ConfigurationError",
    "IterationLimitExceeded",
    "TranscriptError",
    "SessionClosed",
    # Models
    "EndpointResponse",
    "InputSchema",
    "Property",
    "Role",
    "SamplingConfig",
    "StopSignal",
    "TextContent",
    "ThinkingContent",
    "ToolChoice",
    "ToolDeclaration",
    "ToolInvocation",
    "ToolResult",
    "Turn",
    "Usage",
]
