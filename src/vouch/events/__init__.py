"""Session stream events.

Public API:
    - BaseEvent: Base class for all events
    - register_event: Decorator for registering event schemas
    - decode_event: Map a raw stream event to its registered model
    - Turn events: TurnStartEvent, TurnEndEvent, TextDeltaEvent,
      ToolExecutionStartEvent, ToolExecutionEndEvent
"""

from .models import BaseEvent
from .registry import EventSchemaRegistry, decode_event, get_event_schema, register_event
from .turn import (
    TextDeltaEvent,
    ToolExecutionEndEvent,
    ToolExecutionStartEvent,
    TurnEndEvent,
    TurnEventType,
    TurnStartEvent,
)
from .types import EventHandler, EventType, Subscription, normalize_event_type

__all__ = [  # noqa: RUF022
    # Core classes
    "BaseEvent",
    "EventSchemaRegistry",
    # Registration
    "register_event",
    "get_event_schema",
    "decode_event",
    # Types
    "EventType",
    "EventHandler",
    "Subscription",
    "normalize_event_type",
    # Turn events
    "TurnEventType",
    "TurnStartEvent",
    "TurnEndEvent",
    "TextDeltaEvent",
    "ToolExecutionStartEvent",
    "ToolExecutionEndEvent",
]
