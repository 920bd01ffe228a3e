# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Core Pydantic models for transcripts, tool catalogues and endpoint responses.

Field aliases follow the Messages API wire names (``input``, ``tool_use_id``,
``content``) so models round-trip with ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class _Base(BaseModel):
    model_config = {"extra": "allow", "populate_by_name": True}


class _Frozen(BaseModel):
    model_config = {"extra": "allow", "populate_by_name": True, "frozen": True}


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class StopSignal(str, Enum):
    """Why the endpoint stopped generating."""

    TOOL_REQUESTED = "tool_use"
    END_OF_TURN = "end_turn"
    MAX_TOKENS_REACHED = "max_tokens"
    STOP_SEQUENCE_HIT = "stop_sequence"


# ── Content items ────────────────────────────────────────────────────

class TextContent(_Frozen):
    type: Literal["text"] = "text"
    text: str = ""


class ToolInvocation(_Frozen):
    """A request from the endpoint to run a named tool.

    Every field is optional at this level; ``extract_tool_calls`` decides
    which invocations are usable.
    """

    type: Literal["tool_use"] = "tool_use"
    id: str = ""
    name: str = ""
    arguments: Optional[Any] = Field(None, alias="input")


class ToolResult(_Frozen):
    type: Literal["tool_result"] = "tool_result"
    invocation_id: str = Field(..., alias="tool_use_id")
    payload: str = Field("", alias="content")
    is_error: bool = False


class ThinkingContent(_Frozen):
    type: Literal["thinking"] = "thinking"
    thinking: str = ""
    signature: Optional[str] = None


ContentItem = Annotated[
    Union[TextContent, ToolInvocation, ToolResult, ThinkingContent],
    Field(discriminator="type"),
]

CONTENT_TYPES = frozenset({"text", "tool_use", "tool_result", "thinking"})


class Turn(_Frozen):
    role: Role
    content: tuple[ContentItem, ...] = ()


# ── Tool catalogue ───────────────────────────────────────────────────

class Property(_Base):
    type: Any = "string"
    description: str = ""
    enum: Optional[list[str]] = None


class InputSchema(_Base):
    type: str = "object"
    properties: dict[str, Property] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)


class ToolDeclaration(_Base):
    name: str
    description: str = ""
    input_schema: InputSchema = Field(default_factory=InputSchema)


class ToolChoiceType(str, Enum):
    AUTO = "auto"
    NONE = "none"
    TOOL = "tool"


class ToolChoice(_Frozen):
    """Tool-selection policy sent as ``tool_choice``.

    ``type`` stays a plain string so an unknown value survives construction
    and is reported by ``validate_tools``.
    """

    type: str = ToolChoiceType.AUTO.value
    name: str = ""
    allow_parallel_calls: bool = True

    @classmethod
    def auto(cls, *, allow_parallel_calls: bool = True) -> ToolChoice:
        return cls(type=ToolChoiceType.AUTO.value, allow_parallel_calls=allow_parallel_calls)

    @classmethod
    def none(cls) -> ToolChoice:
        return cls(type=ToolChoiceType.NONE.value)

    @classmethod
    def forced(cls, name: str, *, allow_parallel_calls: bool = True) -> ToolChoice:
        return cls(
            type=ToolChoiceType.TOOL.value,
            name=name,
            allow_parallel_calls=allow_parallel_calls,
        )


# ── Endpoint exchange ────────────────────────────────────────────────

class SamplingConfig(_Base):
    model: str
    max_tokens: int = 1024
    system: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    stop_sequences: Optional[list[str]] = None
    metadata: Optional[dict[str, Any]] = None


class Usage(_Base):
    input_tokens: int = 0
    output_tokens: int = 0

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class EndpointResponse(_Base):
    id: str = ""
    model: str = ""
    role: Role = Role.ASSISTANT
    content: tuple[ContentItem, ...] = ()
    stop_reason: StopSignal
    usage: Usage = Field(default_factory=Usage)

    @property
    def text(self) -> str:
        """Concatenated text of all text items."""
        return "".join(item.text for item in self.content if isinstance(item, TextContent))
