# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Default demo tool catalogue used by the CLI.

The handlers return placeholder data tagged ``"source": "demo"``; real
deployments register their own handlers under the same names.
"""

from __future__ import annotations

from typing import Any

from .agent import ToolAgent


def _require(arguments: Any, key: str) -> str:
    value = arguments.get(key) if isinstance(arguments, dict) else None
    if not value:
        raise ValueError(f"missing required parameter: {key}")
    return str(value)


def register_default_tools(agent: ToolAgent) -> ToolAgent:
    """Register get_weather, get_stock_price, SearchInternet and DeepSearch."""

    @agent.tool(
        name="get_weather",
        description="Gets current weather for a specified location",
        input_schema={
            "type": "object",
            "properties": {
                "location": {"type": "string", "description": "Location (city, country, or region)"},
                "unit": {
                    "type": "string",
                    "description": "Temperature unit (celsius or fahrenheit)",
                    "enum": ["celsius", "fahrenheit"],
                },
            },
            "required": ["location"],
        },
    )
    async def get_weather(ctx, arguments) -> dict[str, Any]:
        location = _require(arguments, "location")
        celsius = 18.0
        return {
            "location": location,
            "temperature_c": celsius,
            "temperature_f": round(celsius * 9 / 5 + 32, 1),
            "conditions": "partly cloudy",
            "humidity": 60,
            "source": "demo",
        }

    @agent.tool(
        name="get_stock_price",
        description="Gets current stock price for a given stock symbol",
        input_schema={
            "type": "object",
            "properties": {"symbol": {"type": "string", "description": "Stock symbol (e.g., AAPL)"}},
            "required": ["symbol"],
        },
    )
    async def get_stock_price(ctx, arguments) -> dict[str, Any]:
        symbol = _require(arguments, "symbol").upper()
        return {"symbol": symbol, "price": 100.0, "currency": "USD", "source": "demo"}

    @agent.tool(
        name="SearchInternet",
        description="Performs a general internet search for information",
        input_schema={
            "type": "object",
            "properties": {"query": {"type": "string", "description": "Search query"}},
            "required": ["query"],
        },
    )
    async def search_internet(ctx, arguments) -> dict[str, Any]:
        query = _require(arguments, "query")
        return {"query": query, "results": [], "source": "demo"}

    @agent.tool(
        name="DeepSearch",
        description="Performs a more comprehensive, detailed search analysis",
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query for detailed analysis"},
            },
            "required": ["query"],
        },
    )
    async def deep_search(ctx, arguments) -> dict[str, Any]:
        query = _require(arguments, "query")
        return {"query": query, "summary": "", "sources": [], "source": "demo"}

    return agent
