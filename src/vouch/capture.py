"""Capture one prompt/response turn from a session event stream."""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from vouch.errors import SessionDisposedError
from vouch.events import TextDeltaEvent, ToolExecutionStartEvent, decode_event
from vouch.session import AgentSession, PromptOptions

_turn_context: ContextVar[str] = ContextVar("turn")


def current_turn() -> str:
    """Get the id of the turn being captured in this context."""
    return _turn_context.get("-")


@dataclass(frozen=True)
class TurnCapture:
    """Final text and tool usage of one turn."""

    text: str
    used_tools: frozenset[str] = frozenset()

    @property
    def used_tools_sorted(self) -> list[str]:
        return sorted(self.used_tools)


@dataclass
class TurnState:
    """Accumulation owned by one in-flight turn."""

    parts: list[str] = field(default_factory=list)
    tools: set[str] = field(default_factory=set)

    def apply(self, raw: Any) -> None:
        event = decode_event(raw)
        if isinstance(event, TextDeltaEvent):
            self.parts.append(event.delta)
        elif isinstance(event, ToolExecutionStartEvent):
            self.tools.add(event.tool_name)

    def finalize(self) -> TurnCapture:
        return TurnCapture(text="".join(self.parts).strip(), used_tools=frozenset(self.tools))


async def capture(session: AgentSession, prompt: str, options: PromptOptions | None = None) -> TurnCapture:
    """Run one prompt and collect what the session streamed back.

    The stream handler is attached for the duration of this call only and is
    released on every exit path, including errors and cancellation.

    Raises:
        SessionDisposedError: If the session was already disposed
        Exception: Whatever ``session.prompt`` raised, unchanged
    """
    if session.disposed:
        raise SessionDisposedError("cannot capture a turn on a disposed session")

    state = TurnState()
    token = _turn_context.set(uuid.uuid4().hex[:8])
    try:
        logger.info("capture.turn.start prompt_chars={}", len(prompt))
        unsubscribe = session.subscribe(state.apply)
        try:
            await session.prompt(prompt, options)
        except BaseException as exc:
            logger.warning("capture.turn.error error={}", exc.__class__.__name__)
            raise
        finally:
            unsubscribe()

        result = state.finalize()
        logger.info(
            "capture.turn.finish text_chars={} tools={}",
            len(result.text),
            ",".join(result.used_tools_sorted) or "-",
        )
        return result
    finally:
        _turn_context.reset(token)
