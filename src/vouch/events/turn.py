"""Events emitted on an agent session while a turn is in flight."""

from enum import Enum
from typing import Any, Optional

from .models import BaseEvent
from .registry import register_event


class TurnEventType(str, Enum):
    """Session stream event types."""

    TURN_START = "turn.start"
    TURN_END = "turn.end"
    TEXT_DELTA = "message.text_delta"
    TOOL_EXECUTION_START = "tool.execution_start"
    TOOL_EXECUTION_END = "tool.execution_end"


@register_event
class TurnStartEvent(BaseEvent):
    """Emitted when a prompt is handed to the responder."""

    event_type = TurnEventType.TURN_START

    prompt: str


@register_event
class TurnEndEvent(BaseEvent):
    """Emitted once the responder settles, successfully or not."""

    event_type = TurnEventType.TURN_END

    ok: bool
    error: Optional[str] = None


@register_event
class TextDeltaEvent(BaseEvent):
    """Incremental assistant text."""

    event_type = TurnEventType.TEXT_DELTA

    delta: str


@register_event
class ToolExecutionStartEvent(BaseEvent):
    """A local tool started executing on behalf of the assistant."""

    event_type = TurnEventType.TOOL_EXECUTION_START

    tool_name: str
    call_id: Optional[str] = None
    arguments: Optional[dict[str, Any]] = None


@register_event
class ToolExecutionEndEvent(BaseEvent):
    """A local tool finished executing."""

    event_type = TurnEventType.TOOL_EXECUTION_END

    tool_name: str
    call_id: Optional[str] = None
    is_error: bool = False
