"""Event type definitions and utilities."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Union

from eventure import Event

EventType = Union[str, Enum]
EventHandler = Callable[[Event], None]
Subscription = Callable[[], None]  # Eventure returns unsubscribe function


def normalize_event_type(event_type: EventType) -> str:
    """Normalize event type to string representation.

    Args:
        event_type: Event type as string or Enum

    Returns:
        Normalized string representation
    """
    if isinstance(event_type, Enum):
        return str(event_type.value)
    return str(event_type)
