# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ToolAgent — tool registration and session factory."""

from __future__ import annotations

from typing import Any, Callable

import aiohttp

from .config import ChatConfig
from .errors import ValidationError
from .llm import AnthropicEndpoint, Endpoint
from .models import InputSchema, ToolChoice, ToolDeclaration
from .prompt import load_system_prompt
from .session import ChatSession
from .tools import HandlerRegistry, ToolHandler
from .validation import validate_tools


class ToolAgent:
    """Collects tools and opens chat sessions against the Messages API.

    Register tools with the decorator, then use the agent as an async
    context manager::

        agent = ToolAgent(config)

        @agent.tool(name="get_weather", description="Current weather",
                    input_schema={"type": "object",
                                  "properties": {"location": {"type": "string"}}})
        async def get_weather(ctx, arguments):
            return {"temperature_c": 10}

        async with agent:
            print(await agent.ask("weather in Paris"))
    """

    def __init__(self, config: ChatConfig | None = None, endpoint: Endpoint | None = None):
        self.config = config or ChatConfig.from_env()
        self._endpoint = endpoint
        self._http: aiohttp.ClientSession | None = None
        self._handlers: dict[str, ToolHandler] = {}
        self._declarations: list[ToolDeclaration] = []

    # ── Tool registration ───────────────────────────────────────────

    def tool(
        self,
        name: str | None = None,
        description: str = "",
        input_schema: dict[str, Any] | InputSchema | None = None,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Decorator to register a tool handler ``(ctx, arguments) -> result``.

        The declaration is validated immediately, so a missing or empty
        ``input_schema`` raises ``ValidationError`` at decoration time.
        """
        def decorator(fn: ToolHandler) -> ToolHandler:
            tool_name = name or fn.__name__
            if input_schema is None:
                raise ValidationError(
                    f"tool {tool_name} needs an input_schema with at least one property",
                    tool_name=tool_name,
                )
            declaration = ToolDeclaration(
                name=tool_name,
                description=description or (fn.__doc__ or "").strip(),
                input_schema=(
                    InputSchema.model_validate(input_schema)
                    if isinstance(input_schema, dict) else input_schema
                ),
            )
            validate_tools([*self._declarations, declaration], ToolChoice.auto())
            self._handlers[tool_name] = fn
            self._declarations.append(declaration)
            return fn
        return decorator

    @property
    def declarations(self) -> tuple[ToolDeclaration, ...]:
        return tuple(self._declarations)

    def registry(self) -> HandlerRegistry:
        """Snapshot of the registered handlers."""
        return HandlerRegistry(self._handlers)

    # ── Sessions ────────────────────────────────────────────────────

    @property
    def endpoint(self) -> Endpoint:
        if self._endpoint is None:
            if self._http is None:
                raise RuntimeError("ToolAgent is not started; use 'async with agent:'")
            self._endpoint = AnthropicEndpoint(self._http, self.config)
        return self._endpoint

    def default_policy(self) -> ToolChoice | None:
        if not self._declarations:
            return None
        return ToolChoice.auto(allow_parallel_calls=self.config.parallel_tools)

    def session(self, policy: ToolChoice | None = None) -> ChatSession:
        """Open a new session over the currently registered tools."""
        system = load_system_prompt(self.config, self._declarations)
        return ChatSession(
            self.endpoint,
            self.config.sampling(system),
            self.declarations,
            self.registry(),
            policy or self.default_policy(),
            max_iterations=self.config.max_iterations,
        )

    async def ask(self, message: str, policy: ToolChoice | None = None) -> str:
        """Run one message through a fresh session and return the final text."""
        response = await self.session(policy).send(message)
        return response.text

    # ── Start / stop ────────────────────────────────────────────────

    async def start(self) -> None:
        if self._http is None:
            self._http = aiohttp.ClientSession()

    async def stop(self) -> None:
        if self._http is not None:
            await self._http.close()
            self._http = None
            if isinstance(self._endpoint, AnthropicEndpoint):
                self._endpoint = None

    async def __aenter__(self) -> "ToolAgent":
        await self.start()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.stop()
