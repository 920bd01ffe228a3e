# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""System prompt construction."""

from __future__ import annotations

from typing import Sequence

from .config import ChatConfig
from .models import ToolDeclaration

DEFAULT_TEMPLATE = (
    "You are an expert research assistant. If the user asks for information you "
    "do not have, use the available tools rather than guessing.\n\n"
    "You have access to the following tools:\n\n{tools}\n\n"
    "For every request, develop a step by step plan, review it, then execute it."
)


def describe_tools(declarations: Sequence[ToolDeclaration]) -> str:
    """Numbered tool list with required and optional parameters."""
    lines = []
    for index, tool in enumerate(declarations, start=1):
        lines.append(f"{index}. '{tool.name}'")
        lines.append(f"   - {tool.description}")
        required = set(tool.input_schema.required)
        for name, prop in tool.input_schema.properties.items():
            kind = "Requires" if name in required else "Optional"
            lines.append(f"   - {kind} {name} parameter: {prop.description or prop.type}")
    return "\n".join(lines) if lines else "(no tools)"


def load_system_prompt(config: ChatConfig, declarations: Sequence[ToolDeclaration] = ()) -> str:
    """Resolve the system prompt: explicit config, then template file, then default."""
    if config.system_prompt:
        return config.system_prompt
    if config.template_path.exists():
        template = config.template_path.read_text()
    else:
        template = DEFAULT_TEMPLATE
    return template.replace("{tools}", describe_tools(declarations))
