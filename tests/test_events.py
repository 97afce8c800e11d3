from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from vouch.events import (
    BaseEvent,
    EventSchemaRegistry,
    TextDeltaEvent,
    ToolExecutionStartEvent,
    TurnEventType,
    decode_event,
    get_event_schema,
)


def test_turn_event_types_are_registered() -> None:
    assert get_event_schema(TurnEventType.TEXT_DELTA) is TextDeltaEvent
    assert get_event_schema("tool.execution_start") is ToolExecutionStartEvent
    assert get_event_schema("agent.thinking") is None


def test_decode_known_event() -> None:
    event = decode_event(SimpleNamespace(type="message.text_delta", data={"delta": "hi", "index": 0}))

    assert event == TextDeltaEvent(delta="hi", index=0)


def test_decode_unknown_or_untyped_event_returns_none() -> None:
    assert decode_event(SimpleNamespace(type="agent.thinking", data={"delta": "hmm"})) is None
    assert decode_event(SimpleNamespace(data={"delta": "hmm"})) is None


def test_decode_malformed_payload_raises() -> None:
    with pytest.raises(ValidationError):
        decode_event(SimpleNamespace(type="message.text_delta", data={"text": "wrong key"}))


def test_registry_rejects_conflicting_class() -> None:
    registry = EventSchemaRegistry()

    class First(BaseEvent):
        event_type = "demo.first"

    class Impostor(BaseEvent):
        event_type = "demo.first"

    registry.register(First)
    registry.register(First)

    with pytest.raises(ValueError, match="already registered"):
        registry.register(Impostor)
    assert registry.get_schema("demo.first") is First


def test_events_are_immutable() -> None:
    event = TextDeltaEvent(delta="x")

    with pytest.raises(ValidationError):
        event.delta = "y"
