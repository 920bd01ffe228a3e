# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Pick the usable tool invocations out of an endpoint response."""

from __future__ import annotations

import logging

from .models import EndpointResponse, ToolInvocation
from .validation import is_valid_tool_name

logger = logging.getLogger(__name__)


def is_valid_tool_call(item: ToolInvocation) -> bool:
    return (
        bool(item.id)
        and bool(item.name)
        and item.arguments is not None
        and is_valid_tool_name(item.name)
    )


def extract_tool_calls(response: EndpointResponse | None) -> list[ToolInvocation]:
    """Return well-formed tool invocations in response order.

    Malformed invocations are dropped, never reported.
    """
    if response is None:
        return []

    calls: list[ToolInvocation] = []
    for index, item in enumerate(response.content):
        if not isinstance(item, ToolInvocation):
            continue
        if not is_valid_tool_call(item):
            logger.debug(
                "Skipping invalid tool call #%d (id=%r, name=%r)", index + 1, item.id, item.name
            )
            continue
        calls.append(item)

    logger.debug("Extracted %d valid tool calls", len(calls))
    return calls
