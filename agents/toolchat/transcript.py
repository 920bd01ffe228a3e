# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Append-only conversation transcript owned by a single session."""

from __future__ import annotations

from typing import Iterable, Iterator

from .errors import TranscriptError
from .models import ContentItem, Role, ToolInvocation, ToolResult, Turn


class Transcript:
    """Ordered, append-only sequence of turns.

    Turns are frozen once appended. A tool result may only reference an
    invocation id that already appears earlier in the transcript.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []
        self._invocation_ids: set[str] = set()

    def append(self, role: Role | str, content: Iterable[ContentItem]) -> Turn:
        """Append a turn and return it."""
        items = tuple(content)
        for item in items:
            if isinstance(item, ToolResult) and item.invocation_id not in self._invocation_ids:
                raise TranscriptError(
                    "tool result references unknown invocation",
                    invocation_id=item.invocation_id,
                )
        turn = Turn(role=Role(role), content=items)
        self._turns.append(turn)
        for item in items:
            if isinstance(item, ToolInvocation) and item.id:
                self._invocation_ids.add(item.id)
        return turn

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def last(self) -> Turn | None:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __repr__(self) -> str:
        return f"Transcript(turns={len(self._turns)})"
