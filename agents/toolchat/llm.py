# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Messages API endpoint client with retry on transient failures."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol, Sequence

import aiohttp
import pydantic

from .config import ChatConfig
from .errors import TransportError
from .models import (
    CONTENT_TYPES,
    EndpointResponse,
    Role,
    SamplingConfig,
    TextContent,
    ToolChoice,
    ToolDeclaration,
    Turn,
)

logger = logging.getLogger(__name__)

# 529 is the endpoint's "overloaded" status
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504, 529})


class Endpoint(Protocol):
    """Anything that can answer a transcript."""

    async def send(
        self,
        transcript: Sequence[Turn],
        declarations: Sequence[ToolDeclaration],
        policy: ToolChoice | None,
        sampling: SamplingConfig,
    ) -> EndpointResponse: ...


def encode_tool_choice(policy: ToolChoice) -> dict[str, Any]:
    data: dict[str, Any] = {"type": policy.type}
    if policy.name:
        data["name"] = policy.name
    if policy.type != "none" and not policy.allow_parallel_calls:
        data["disable_parallel_tool_use"] = True
    return data


def build_request(
    transcript: Sequence[Turn],
    declarations: Sequence[ToolDeclaration],
    policy: ToolChoice | None,
    sampling: SamplingConfig,
) -> dict[str, Any]:
    """Build the JSON request body. System turns are folded into ``system``."""
    system_parts = [sampling.system] if sampling.system else []
    messages: list[dict[str, Any]] = []
    for turn in transcript:
        if turn.role is Role.SYSTEM:
            system_parts.extend(
                item.text for item in turn.content if isinstance(item, TextContent)
            )
            continue
        messages.append({
            "role": turn.role.value,
            "content": [item.model_dump(by_alias=True, exclude_none=True) for item in turn.content],
        })

    payload: dict[str, Any] = {
        "model": sampling.model,
        "max_tokens": sampling.max_tokens,
        "messages": messages,
    }
    if system_parts:
        payload["system"] = "\n\n".join(system_parts)
    for key in ("temperature", "top_p", "top_k", "stop_sequences", "metadata"):
        value = getattr(sampling, key)
        if value is not None:
            payload[key] = value
    if declarations:
        payload["tools"] = [
            tool.model_dump(exclude_none=True) for tool in declarations
        ]
        if policy is not None:
            payload["tool_choice"] = encode_tool_choice(policy)
    return payload


def parse_response(data: Any, status: int | None = None) -> EndpointResponse:
    """Decode a response body. Unknown content block types are dropped."""
    if not isinstance(data, dict):
        raise TransportError(
            f"malformed endpoint response: expected a JSON object, got {type(data).__name__}",
            status=status,
        )
    blocks = data.get("content") or []
    if not isinstance(blocks, list):
        raise TransportError("malformed endpoint response: content is not a list", status=status)
    known = []
    for block in blocks:
        if isinstance(block, dict) and block.get("type") in CONTENT_TYPES:
            known.append(block)
        else:
            logger.warning("Dropping unsupported content block: %r", block)
    try:
        return EndpointResponse.model_validate({**data, "content": known})
    except pydantic.ValidationError as e:
        raise TransportError(f"malformed endpoint response: {e}", status=status) from e


class AnthropicEndpoint:
    """Sends transcripts to the Messages API; retries connection errors and 429/5xx."""

    def __init__(self, session: aiohttp.ClientSession, config: ChatConfig) -> None:
        self.session = session
        self.config = config

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.config.api_key,
            "anthropic-version": self.config.api_version,
            "content-type": "application/json",
        }

    async def send(
        self,
        transcript: Sequence[Turn],
        declarations: Sequence[ToolDeclaration],
        policy: ToolChoice | None,
        sampling: SamplingConfig,
    ) -> EndpointResponse:
        payload = build_request(transcript, declarations, policy, sampling)
        attempts = max(1, self.config.max_retries)

        for attempt in range(1, attempts + 1):
            try:
                async with self.session.post(
                    self.config.api_url,
                    json=payload,
                    headers=self._headers(),
                    timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
                ) as resp:
                    if resp.status == 200:
                        try:
                            data = await resp.json(content_type=None)
                        except ValueError as e:
                            raise TransportError(
                                f"malformed endpoint response: invalid JSON: {e}",
                                status=resp.status,
                            ) from e
                        return parse_response(data, status=resp.status)
                    text = await resp.text()
                    if resp.status not in RETRYABLE_STATUSES or attempt == attempts:
                        raise TransportError(
                            f"endpoint returned {resp.status}: {text[:200]}",
                            status=resp.status,
                        )
                    logger.warning(
                        "Endpoint returned %d (attempt %d/%d), retrying",
                        resp.status, attempt, attempts,
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt == attempts:
                    raise TransportError(
                        f"endpoint unreachable after {attempts} attempts: {e}"
                    ) from e
                logger.warning("Endpoint request failed (attempt %d/%d): %s", attempt, attempts, e)
            await asyncio.sleep(self.config.retry_delay * attempt)

        raise TransportError("unexpected retry exhaustion")
