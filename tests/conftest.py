from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from vouch.events import BaseEvent
from vouch.session import EventBusSession, PromptOptions


def scripted_responder(events: Sequence[BaseEvent], *, error: Exception | None = None):
    prompts: list[tuple[str, PromptOptions]] = []

    async def respond(session: EventBusSession, text: str, options: PromptOptions) -> None:
        prompts.append((text, options))
        for event in events:
            session.emit(event)
        if error is not None:
            raise error

    respond.prompts = prompts  # type: ignore[attr-defined]
    return respond


@pytest.fixture
def make_session() -> Callable[..., EventBusSession]:
    def _make(events: Sequence[BaseEvent] = (), *, error: Exception | None = None) -> EventBusSession:
        return EventBusSession(scripted_responder(events, error=error), name="test")

    return _make


@pytest.fixture
def make_responder():
    return scripted_responder
