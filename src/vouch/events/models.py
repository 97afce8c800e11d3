"""Event model definitions."""

from __future__ import annotations

from abc import ABC
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from .types import EventType, normalize_event_type


class BaseEvent(BaseModel, ABC):
    """Base class for all session stream events.

    Subclasses define their ``event_type`` and payload fields. Providers may
    attach extra payload keys; they are kept but never required.
    """

    event_type: ClassVar[EventType]

    model_config = ConfigDict(extra="allow", frozen=True)

    @classmethod
    def get_event_type_value(cls) -> str:
        """Get the string value of the event type."""
        return normalize_event_type(cls.event_type)
