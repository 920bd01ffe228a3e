# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ChatSession — the request/response loop driving tool use.

One session owns one transcript. Each call to :meth:`ChatSession.send`
appends the user message and then cycles::

    request_sent ──(stop != tool_use)──> done
         │
         └─(tool_use)──> tools_pending ──> request_sent

until the endpoint answers, an error aborts the session, or the iteration
bound is hit. Requests and handlers run strictly one at a time.
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Mapping, Sequence

from .errors import (
    IterationLimitExceeded,
    ProtocolViolation,
    SessionClosed,
    ToolchatError,
)
from .extract import extract_tool_calls
from .llm import Endpoint
from .models import (
    EndpointResponse,
    Role,
    SamplingConfig,
    StopSignal,
    TextContent,
    ToolChoice,
    ToolDeclaration,
    ToolResult,
    Usage,
)
from .tools import HandlerRegistry, ToolContext, ToolHandler, dispatch_tool_call
from .transcript import Transcript
from .validation import validate_tools

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10


class SessionState(str, Enum):
    AWAITING_USER_INPUT = "awaiting_user_input"
    REQUEST_SENT = "request_sent"
    TOOLS_PENDING = "tools_pending"
    DONE = "done"
    FAILED = "failed"


class ChatSession:
    """A tool-enabled conversation against one endpoint.

    The catalogue, policy and registry are checked on construction, so a
    malformed catalogue or a declared tool without a handler fails before
    any request is sent.
    """

    def __init__(
        self,
        endpoint: Endpoint,
        sampling: SamplingConfig,
        declarations: Sequence[ToolDeclaration] = (),
        registry: Mapping[str, ToolHandler] | None = None,
        policy: ToolChoice | None = None,
        *,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        session_id: str | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.sampling = sampling
        self.declarations = tuple(declarations)
        if not isinstance(registry, HandlerRegistry):
            registry = HandlerRegistry(registry)
        self.registry = registry

        if self.declarations and policy is None:
            policy = ToolChoice.auto()
        validate_tools(self.declarations, policy)
        self.registry.ensure_covers(self.declarations)

        self.policy = policy
        self.allow_parallel_calls = policy.allow_parallel_calls if policy else True
        self.max_iterations = max_iterations
        self.session_id = session_id or uuid.uuid4().hex
        self.transcript = Transcript()
        self.state = SessionState.AWAITING_USER_INPUT
        self.usage = Usage()
        self.requests_sent = 0

    async def send(self, user_message: str) -> EndpointResponse:
        """Run one user message to completion and return the final response."""
        if self.state is SessionState.FAILED:
            raise SessionClosed("session has failed; start a new one")
        if self.state in (SessionState.REQUEST_SENT, SessionState.TOOLS_PENDING):
            raise SessionClosed("session is already processing a message")

        try:
            return await self._run(user_message)
        except BaseException:
            self.state = SessionState.FAILED
            raise

    async def _run(self, user_message: str) -> EndpointResponse:
        self.transcript.append(Role.USER, [TextContent(text=user_message)])
        active_policy = self.policy
        iterations = 0

        while True:
            logger.debug(
                "Session %s: iteration %d/%d", self.session_id, iterations + 1, self.max_iterations
            )
            if iterations >= self.max_iterations:
                logger.warning("Session %s exceeded %d iterations", self.session_id, self.max_iterations)
                raise IterationLimitExceeded(self.max_iterations, iteration=iterations)

            self.state = SessionState.REQUEST_SENT
            response = await self._request(active_policy, iterations)

            if response.content:
                self.transcript.append(Role.ASSISTANT, response.content)

            if response.stop_reason is not StopSignal.TOOL_REQUESTED:
                logger.debug(
                    "Session %s done (stop_reason=%s)", self.session_id, response.stop_reason.value
                )
                self.state = SessionState.DONE
                return response

            self.state = SessionState.TOOLS_PENDING
            results = await self._run_tools(response, iterations)
            self.transcript.append(Role.USER, results)

            # A forced or disabled choice only applies to the first tool turn;
            # the endpoint must then be free to answer.
            if iterations == 0:
                active_policy = None
            else:
                active_policy = self.policy
            iterations += 1

    async def _request(self, policy: ToolChoice | None, iteration: int) -> EndpointResponse:
        try:
            response = await self.endpoint.send(
                self.transcript.turns, self.declarations, policy, self.sampling
            )
        except ToolchatError as e:
            if e.iteration is None:
                e.iteration = iteration
            raise
        self.requests_sent += 1
        self.usage = self.usage + response.usage
        return response

    async def _run_tools(self, response: EndpointResponse, iteration: int) -> list[ToolResult]:
        calls = extract_tool_calls(response)
        if not calls:
            raise ProtocolViolation(
                "tool use signaled but no valid invocation found", iteration=iteration
            )

        if not self.allow_parallel_calls and len(calls) > 1:
            logger.warning(
                "Received %d tool calls with parallel calls disabled, using only the first",
                len(calls),
            )
            calls = calls[:1]

        results: list[ToolResult] = []
        for call in calls:
            ctx = ToolContext(
                session_id=self.session_id,
                iteration=iteration,
                invocation_id=call.id,
                tool_name=call.name,
            )
            results.append(await dispatch_tool_call(call, self.registry, ctx))
        return results


async def run_session(
    endpoint: Endpoint,
    user_message: str,
    declarations: Sequence[ToolDeclaration] = (),
    policy: ToolChoice | None = None,
    sampling: SamplingConfig | None = None,
    registry: Mapping[str, ToolHandler] | None = None,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> EndpointResponse:
    """Run a single user message through a fresh session."""
    if sampling is None:
        raise ValueError("sampling config is required")
    session = ChatSession(
        endpoint,
        sampling,
        declarations,
        registry,
        policy,
        max_iterations=max_iterations,
    )
    return await session.send(user_message)
