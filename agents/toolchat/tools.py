# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Handler registry and tool dispatch — turns tool invocations into tool results."""

from __future__ import annotations

import copy
import inspect
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterator, Mapping, Sequence, Union

from .errors import ConfigurationError
from .models import ToolDeclaration, ToolInvocation, ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[["ToolContext", Any], Union[Awaitable[Any], Any]]

ERROR_PREFIX = "Error executing tool: "


@dataclass(frozen=True)
class ToolContext:
    """Per-invocation context handed to every handler."""

    session_id: str
    iteration: int
    invocation_id: str
    tool_name: str


class HandlerRegistry(Mapping[str, ToolHandler]):
    """Immutable mapping from tool name to handler.

    Shared freely between sessions; nothing mutates it after construction.
    """

    def __init__(self, handlers: Mapping[str, ToolHandler] | None = None) -> None:
        self._handlers = MappingProxyType(dict(handlers or {}))

    def __getitem__(self, name: str) -> ToolHandler:
        return self._handlers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def ensure_covers(self, declarations: Sequence[ToolDeclaration]) -> None:
        """Fail fast if any declared tool lacks a handler."""
        missing = [tool.name for tool in declarations if tool.name not in self._handlers]
        if missing:
            raise ConfigurationError(
                f"no handler for tool: {', '.join(missing)}", tool_name=missing[0]
            )

    def __repr__(self) -> str:
        return f"HandlerRegistry({sorted(self._handlers)})"


def _result_text(result: Any) -> str:
    return result if isinstance(result, str) else json.dumps(result, default=str)


async def dispatch_tool_call(
    invocation: ToolInvocation,
    registry: Mapping[str, ToolHandler],
    ctx: ToolContext,
) -> ToolResult:
    """Run one invocation and return its transcript result.

    A missing handler raises ``ConfigurationError``. Any exception raised by
    the handler itself is encoded as ``ToolResult(is_error=True)``.
    """
    handler = registry.get(invocation.name)
    if handler is None:
        logger.error("No handler found for tool '%s'", invocation.name)
        raise ConfigurationError(
            f"no handler for tool: {invocation.name}",
            tool_name=invocation.name,
            invocation_id=invocation.id,
            iteration=ctx.iteration,
        )

    logger.debug("Executing tool '%s' (id=%s)", invocation.name, invocation.id)
    try:
        # Handlers get their own copy; the invocation stays in the transcript.
        result = handler(ctx, copy.deepcopy(invocation.arguments))
        if inspect.isawaitable(result):
            result = await result
    except Exception as e:
        logger.info("Tool '%s' failed: %s", invocation.name, e)
        return ToolResult(
            invocation_id=invocation.id,
            payload=f"{ERROR_PREFIX}{e}",
            is_error=True,
        )

    logger.debug("Tool '%s' succeeded", invocation.name)
    return ToolResult(invocation_id=invocation.id, payload=_result_text(result))
