# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception types raised by the tool loop.

Handler failures are not represented here: they are encoded into the
transcript as ``ToolResult(is_error=True)`` and never abort a session.
"""

from __future__ import annotations


class ToolchatError(Exception):
    """Base exception. Carries enough context to diagnose without the transcript."""

    def __init__(
        self,
        message: str,
        *,
        iteration: int | None = None,
        tool_name: str | None = None,
        invocation_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.iteration = iteration
        self.tool_name = tool_name
        self.invocation_id = invocation_id

    def __str__(self) -> str:
        parts = [self.message]
        if self.tool_name:
            parts.append(f"tool={self.tool_name}")
        if self.invocation_id:
            parts.append(f"invocation={self.invocation_id}")
        if self.iteration is not None:
            parts.append(f"iteration={self.iteration}")
        if len(parts) == 1:
            return self.message
        return f"{parts[0]} ({', '.join(parts[1:])})"


class ValidationError(ToolchatError):
    """Tool catalogue or tool-choice policy is malformed."""


class TransportError(ToolchatError):
    """Endpoint unreachable, rejected the request, or returned an unreadable body."""

    def __init__(self, message: str, *, status: int | None = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status = status


class ProtocolViolation(ToolchatError):
    """Endpoint signaled tool use without a usable tool invocation."""


class ConfigurationError(ToolchatError):
    """No handler is registered for a declared or invoked tool."""


class IterationLimitExceeded(ToolchatError):
    """The request/tool cycle did not terminate within the configured bound."""

    def __init__(self, limit: int, **kwargs) -> None:
        super().__init__(
            f"exceeded maximum number of tool call iterations ({limit})", **kwargs
        )
        self.limit = limit


class TranscriptError(ToolchatError):
    """An append would break the transcript's invariants."""


class SessionClosed(ToolchatError):
    """The session already failed and cannot accept more messages."""
