# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Interactive REPL mode."""

from __future__ import annotations

from .agent import ToolAgent
from .errors import ToolchatError, TransportError
from .session import SessionState


async def interactive_mode(agent: ToolAgent) -> None:
    """Interactive CLI loop — type messages, get responses with tool access."""
    async with agent:
        print("Chat initialized with tools. Type 'exit' to quit.")
        print("Available tools:")
        for tool in agent.declarations:
            print(f"- {tool.name}: {tool.description}")
        print()

        session = agent.session()

        while True:
            try:
                user_input = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nGoodbye.")
                break

            if not user_input:
                continue
            if user_input.lower() in ("quit", "exit"):
                break

            try:
                response = await session.send(user_input)
                print(f"\nAssistant:\n{response.text}\n")
            except TransportError as e:
                print(f"\nERROR: Request to {agent.config.api_url} failed: {e}\n")
            except ToolchatError as e:
                print(f"\nERROR: {e}\n")

            if session.state is SessionState.FAILED:
                print("Starting a new conversation.\n")
                session = agent.session()
