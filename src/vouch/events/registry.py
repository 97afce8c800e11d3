"""Event schema registry and decoding."""

from __future__ import annotations

from typing import Any

from .models import BaseEvent
from .types import EventType, normalize_event_type


class EventSchemaRegistry:
    """Registry mapping event type strings to event classes."""

    def __init__(self) -> None:
        self._schemas: dict[str, type[BaseEvent]] = {}

    def register(self, event_class: type[BaseEvent]) -> type[BaseEvent]:
        """Register an event class.

        Args:
            event_class: The event class to register

        Returns:
            The same event class (for decorator usage)

        Raises:
            ValueError: If event type is already registered with different class
        """
        event_type = event_class.get_event_type_value()
        existing = self._schemas.get(event_type)
        if existing is not None and existing is not event_class:
            msg = (
                f"Event type '{event_type}' already registered with different class: "
                f"{existing.__name__} vs {event_class.__name__}"
            )
            raise ValueError(msg)
        self._schemas[event_type] = event_class
        return event_class

    def get_schema(self, event_type: EventType) -> type[BaseEvent] | None:
        return self._schemas.get(normalize_event_type(event_type))


_global_registry = EventSchemaRegistry()


def register_event(event_class: type[BaseEvent]) -> type[BaseEvent]:
    """Register an event class with the global schema registry."""
    return _global_registry.register(event_class)


def get_event_schema(event_type: EventType) -> type[BaseEvent] | None:
    return _global_registry.get_schema(event_type)


def decode_event(raw: Any) -> BaseEvent | None:
    """Turn a raw stream event into its registered model.

    Args:
        raw: An eventure ``Event`` or any object with ``type`` and ``data``

    Returns:
        The validated event model, or None when the type has no schema

    Raises:
        pydantic.ValidationError: If a registered type carries a malformed payload
    """
    event_type = getattr(raw, "type", None)
    if not isinstance(event_type, str):
        return None
    schema = get_event_schema(event_type)
    if schema is None:
        return None
    return schema.model_validate(getattr(raw, "data", None) or {})
