# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Tool catalogue and tool-choice validation, run before the first request."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from .errors import ValidationError
from .models import InputSchema, ToolChoice, ToolChoiceType, ToolDeclaration

logger = logging.getLogger(__name__)

TOOL_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,64}$")


def is_valid_tool_name(name: str) -> bool:
    return bool(name) and TOOL_NAME_PATTERN.fullmatch(name) is not None


def validate_tools(
    declarations: Sequence[ToolDeclaration],
    policy: ToolChoice | None,
) -> None:
    """Check declarations and policy; raise ``ValidationError`` on the first problem.

    Nothing is checked when there are no declarations.
    """
    if not declarations:
        return

    logger.debug("Validating %d tool declarations", len(declarations))
    # Duplicate names, a forced choice naming an undeclared tool and required
    # entries without a property are all rejected by the endpoint with a 400.
    seen: set[str] = set()
    for tool in declarations:
        if not is_valid_tool_name(tool.name):
            raise ValidationError(
                f"invalid tool name format: {tool.name!r} - must match "
                f"{TOOL_NAME_PATTERN.pattern}",
                tool_name=tool.name,
            )
        if tool.name in seen:
            raise ValidationError(f"duplicate tool name: {tool.name}", tool_name=tool.name)
        seen.add(tool.name)

        if not tool.description:
            raise ValidationError(
                f"tool {tool.name} missing required description", tool_name=tool.name
            )

        problem = _schema_problem(tool.input_schema)
        if problem:
            raise ValidationError(
                f"invalid input schema for tool {tool.name}: {problem}",
                tool_name=tool.name,
            )

    validate_tool_choice(policy, seen)


def validate_tool_choice(policy: ToolChoice | None, tool_names: set[str] | None = None) -> None:
    if policy is None:
        raise ValidationError("tool_choice policy required when tools are present")

    if policy.type in (ToolChoiceType.AUTO.value, ToolChoiceType.NONE.value):
        return
    if policy.type == ToolChoiceType.TOOL.value:
        if not policy.name:
            raise ValidationError("tool_choice name must be specified when type is 'tool'")
        if tool_names is not None and policy.name not in tool_names:
            raise ValidationError(
                f"tool_choice names undeclared tool: {policy.name}", tool_name=policy.name
            )
        return
    raise ValidationError(f"unknown policy type: {policy.type!r}")


def _schema_problem(schema: InputSchema) -> str:
    if schema.type != "object":
        return "input schema type must be 'object'"
    if not schema.properties:
        return "input schema must define at least one property"
    unknown = [name for name in schema.required if name not in schema.properties]
    if unknown:
        return f"required names undeclared properties: {', '.join(unknown)}"
    return ""
