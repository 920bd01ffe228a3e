# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""CLI entry point — Click-based commands."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click
import pydantic

from .agent import ToolAgent
from .catalog import register_default_tools
from .config import ChatConfig
from .errors import ToolchatError, ValidationError
from .models import ToolChoice, ToolDeclaration
from .validation import validate_tools


def _default_agent(config: ChatConfig) -> ToolAgent:
    return register_default_tools(ToolAgent(config))


def _require_api_key(config: ChatConfig) -> None:
    if not config.api_key:
        click.echo("ERROR: ANTHROPIC_API_KEY not set.", err=True)
        sys.exit(1)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--model", default=None, help="Model name (overrides TOOLCHAT_MODEL)")
@click.option("--max-iterations", type=int, default=None, help="Maximum tool call cycles per message")
@click.pass_context
def cli(ctx: click.Context, debug: bool, model: str | None, max_iterations: int | None) -> None:
    """Toolchat — chat with tool calling against the Messages API."""
    ctx.ensure_object(dict)
    config = ChatConfig.from_env()
    if model:
        config.model = model
    if max_iterations is not None:
        config.max_iterations = max_iterations
    if debug:
        config.debug = True
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def chat(ctx: click.Context) -> None:
    """Start an interactive chat with the default tools."""
    from .interactive import interactive_mode

    config = ctx.obj["config"]
    _require_api_key(config)
    asyncio.run(interactive_mode(_default_agent(config)))


@cli.command()
@click.argument("message")
@click.option("--force-tool", default=None, help="Force the first request to call this tool")
@click.pass_context
def ask(ctx: click.Context, message: str, force_tool: str | None) -> None:
    """Send a single MESSAGE and print the final answer."""
    config = ctx.obj["config"]
    _require_api_key(config)
    agent = _default_agent(config)
    policy = None
    if force_tool:
        policy = ToolChoice.forced(force_tool, allow_parallel_calls=config.parallel_tools)

    async def _run() -> str:
        async with agent:
            return await agent.ask(message, policy)

    try:
        click.echo(asyncio.run(_run()))
    except ToolchatError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)


# ── Tool subcommands ────────────────────────────────────────────────

@cli.group()
def tools() -> None:
    """Inspect and validate tool catalogues."""


@tools.command("list")
@click.pass_context
def tools_list(ctx: click.Context) -> None:
    """List the default tools."""
    agent = _default_agent(ctx.obj["config"])
    for tool in agent.declarations:
        click.echo(f"  {tool.name:20s}  {tool.description[:60]}")


@tools.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def tools_validate(path: Path) -> None:
    """Validate a JSON tool catalogue file.

    The file holds {"tools": [...], "tool_choice": {...}}; tool_choice
    defaults to automatic.
    """
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        click.echo(f"ERROR: Invalid JSON in {path}: {e}", err=True)
        sys.exit(1)

    try:
        declarations = [ToolDeclaration.model_validate(t) for t in data.get("tools", [])]
        raw_choice = data.get("tool_choice")
        policy = ToolChoice.model_validate(raw_choice) if raw_choice else ToolChoice.auto()
        validate_tools(declarations, policy)
    except (pydantic.ValidationError, ValidationError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)
    click.echo(f"OK: {len(declarations)} tools valid.")


def main() -> None:
    """Entry point for `python -m toolchat` and the `toolchat` script."""
    cli(standalone_mode=True)
