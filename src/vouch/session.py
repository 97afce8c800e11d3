"""Agent session contract and an event-bus backed implementation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Literal, Protocol, runtime_checkable

from eventure import EventBus, EventLog
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from vouch.errors import SessionDisposedError
from vouch.events import BaseEvent, EventHandler, Subscription, TurnEndEvent, TurnStartEvent


class ImageContent(BaseModel):
    """Base64 image attachment."""

    type: Literal["image"] = "image"
    data: str
    mime_type: str


class PromptOptions(BaseModel):
    """Per-prompt options. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    images: list[ImageContent] = Field(default_factory=list)


@runtime_checkable
class AgentSession(Protocol):
    """What the capture layer needs from a session."""

    @property
    def disposed(self) -> bool: ...

    def subscribe(self, handler: EventHandler) -> Subscription: ...

    async def prompt(self, text: str, options: PromptOptions | None = None) -> None: ...

    def dispose(self) -> None: ...


Responder = Callable[["EventBusSession", str, PromptOptions], Awaitable[None]]


class EventBusSession:
    """Session whose event stream is an eventure bus.

    The responder produces the answer for one prompt by emitting events on
    the session. ``prompt`` returns once the responder settles.
    """

    def __init__(self, responder: Responder, *, name: str = "session") -> None:
        self._responder = responder
        self._name = name
        self._log = EventLog()
        self._bus = EventBus(self._log)
        self._releases: list[Subscription] = []
        self._disposed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def subscriber_count(self) -> int:
        return len(self._releases)

    @property
    def retained_events(self) -> int:
        return len(self._log.events)

    def subscribe(self, handler: EventHandler) -> Subscription:
        self._ensure_open()
        unsubscribe = self._bus.subscribe("*", handler)
        released = False

        def release() -> None:
            nonlocal released
            if released:
                return
            released = True
            unsubscribe()
            self._releases.remove(release)

        self._releases.append(release)
        return release

    def emit(self, event: BaseEvent) -> None:
        self._ensure_open()
        self._bus.publish(event.get_event_type_value(), event.model_dump())

    async def prompt(self, text: str, options: PromptOptions | None = None) -> None:
        self._ensure_open()
        options = options or PromptOptions()
        self.emit(TurnStartEvent(prompt=text))
        ok = False
        error: str | None = None
        try:
            await self._responder(self, text, options)
            ok = True
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            raise
        finally:
            if not self._disposed:
                self.emit(TurnEndEvent(ok=ok, error=error))
            # Delivery is synchronous, so nothing reads the log after the turn.
            self._log.events.clear()

    def dispose(self) -> None:
        if self._disposed:
            return
        for release in list(self._releases):
            release()
        self._log.events.clear()
        self._disposed = True
        logger.debug("session.disposed name={}", self._name)

    def _ensure_open(self) -> None:
        if self._disposed:
            raise SessionDisposedError(f"session '{self._name}' is disposed")
