# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Chat configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .models import SamplingConfig


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name, "")
    return float(raw) if raw else None


@dataclass
class ChatConfig:
    """All configuration for a tool-enabled chat session."""

    api_key: str = ""
    api_url: str = "https://api.anthropic.com/v1/messages"
    api_version: str = "2023-06-01"
    model: str = "claude-3-5-sonnet-20241022"
    max_tokens: int = 8000
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    max_iterations: int = 10
    request_timeout: int = 120
    max_retries: int = 3
    retry_delay: float = 1.0
    system_prompt: str = ""
    parallel_tools: bool = False
    debug: bool = False
    template_path: Path = field(default_factory=lambda: Path.home() / ".toolchat" / "system-prompt.md")

    def sampling(self, system: str | None = None) -> SamplingConfig:
        """Derive the per-request sampling parameters."""
        return SamplingConfig(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system if system is not None else (self.system_prompt or None),
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    @classmethod
    def from_env(cls) -> ChatConfig:
        """Load configuration from environment variables."""
        top_k = os.environ.get("TOOLCHAT_TOP_K", "")
        template = os.environ.get("TOOLCHAT_PROMPT_TEMPLATE", "")
        config = cls(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            api_url=os.environ.get("TOOLCHAT_API_URL", "https://api.anthropic.com/v1/messages"),
            api_version=os.environ.get("TOOLCHAT_API_VERSION", "2023-06-01"),
            model=os.environ.get("TOOLCHAT_MODEL", "claude-3-5-sonnet-20241022"),
            max_tokens=int(os.environ.get("TOOLCHAT_MAX_TOKENS", "8000")),
            temperature=_env_float("TOOLCHAT_TEMPERATURE"),
            top_p=_env_float("TOOLCHAT_TOP_P"),
            top_k=int(top_k) if top_k else None,
            max_iterations=int(os.environ.get("TOOLCHAT_MAX_ITERATIONS", "10")),
            request_timeout=int(os.environ.get("TOOLCHAT_REQUEST_TIMEOUT", "120")),
            max_retries=int(os.environ.get("TOOLCHAT_MAX_RETRIES", "3")),
            retry_delay=float(os.environ.get("TOOLCHAT_RETRY_DELAY", "1.0")),
            system_prompt=os.environ.get("TOOLCHAT_SYSTEM_PROMPT", ""),
            parallel_tools=_env_bool("TOOLCHAT_PARALLEL_TOOLS", "false"),
            debug=_env_bool("TOOLCHAT_DEBUG", "false"),
        )
        if template:
            config.template_path = Path(template).expanduser()
        return config
