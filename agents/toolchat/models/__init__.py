# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pydantic v2 models for transcripts, tool catalogues and endpoint responses."""

from .core import (
    CONTENT_TYPES,
    ContentItem,
    EndpointResponse,
    InputSchema,
    Property,
    Role,
    SamplingConfig,
    StopSignal,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolChoiceType,
    ToolDeclaration,
    ToolInvocation,
    ToolResult,
    Turn,
    Usage,
)

__all__ = [
    "CONTENT_TYPES",
    "ContentItem",
    "EndpointResponse",
    "InputSchema",
    "Property",
    "Role",
    "SamplingConfig",
    "StopSignal",
    "TextContent",
    "ThinkingContent",
    "ToolChoice",
    "ToolChoiceType",
    "ToolDeclaration",
    "ToolInvocation",
    "ToolResult",
    "Turn",
    "Usage",
]
