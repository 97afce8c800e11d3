"""Republic integration helpers."""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger
from republic import LLM, Tool
from republic.tape import InMemoryTapeStore

from vouch.config import Settings
from vouch.errors import ProviderError
from vouch.events import TextDeltaEvent, ToolExecutionEndEvent, ToolExecutionStartEvent
from vouch.session import EventBusSession, ImageContent, PromptOptions

TAPE_NAME = "vouch"
ANTHROPIC_WEB_SEARCH_TYPE = "web_search_20250305"
NATIVE_SEARCH_PROVIDERS = frozenset({"anthropic"})


def build_llm(settings: Settings) -> LLM:
    """Build Republic LLM client for one process."""

    return LLM(
        settings.model,
        api_key=settings.require_api_key(),
        api_base=settings.api_base,
        tape_store=InMemoryTapeStore(),
    )


def native_web_search_tool(settings: Settings) -> dict[str, Any] | None:
    """Provider-side web search tool with an approximate user location.

    Returns None when disabled or when the provider has no native search.
    """

    if not settings.native_web_search:
        return None
    if settings.provider not in NATIVE_SEARCH_PROVIDERS:
        logger.warning("republic.native_search.unsupported provider={}", settings.provider)
        return None
    return {
        "type": ANTHROPIC_WEB_SEARCH_TYPE,
        "name": "web_search",
        "max_uses": settings.web_search_max_uses,
        "user_location": {
            "type": "approximate",
            "city": settings.city,
            "region": settings.region,
            "country": settings.country,
            "timezone": settings.timezone,
        },
    }


def build_session(settings: Settings, *, tools: list[Tool] | None = None) -> EventBusSession:
    """Build a session that answers prompts through Republic."""

    native_tool = native_web_search_tool(settings)
    responder = RepublicResponder(
        build_llm(settings),
        system_prompt=settings.system_prompt,
        max_tokens=settings.max_tokens,
        timeout_seconds=settings.timeout_seconds,
        tools=tools,
        native_tools=[native_tool] if native_tool is not None else None,
    )
    return EventBusSession(responder, name=settings.model)


def image_message(text: str, images: list[ImageContent]) -> dict[str, Any]:
    """OpenAI-style user message carrying the prompt and inline images."""

    content: list[dict[str, Any]] = [{"type": "text", "text": text}]
    for image in images:
        content.append({
            "type": "image_url",
            "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"},
        })
    return {"role": "user", "content": content}


class RepublicResponder:
    """Streams one prompt through Republic and relays it onto the session.

    Native tools run on the provider side, so their calls are not reported as
    local tool executions.
    """

    def __init__(
        self,
        llm: LLM,
        *,
        system_prompt: str = "",
        max_tokens: int = 4096,
        timeout_seconds: int | None = None,
        tools: list[Tool] | None = None,
        native_tools: list[dict[str, Any]] | None = None,
        tape_name: str = TAPE_NAME,
    ) -> None:
        self._llm = llm
        self._system_prompt = system_prompt.strip()
        self._max_tokens = max_tokens
        self._timeout_seconds = timeout_seconds
        self._tools = tools or []
        self._native_tools = native_tools or []
        self._native_names = frozenset(str(tool.get("name")) for tool in self._native_tools)
        self._tape_name = tape_name

    async def __call__(self, session: EventBusSession, text: str, options: PromptOptions) -> None:
        stream_kwargs: dict[str, Any] = {
            "system_prompt": self._system_prompt,
            "max_tokens": self._max_tokens,
            "tools": [*self._tools, *self._native_tools],
        }
        if options.images:
            stream_kwargs["messages"] = [image_message(text, options.images)]
        else:
            stream_kwargs["prompt"] = text
        try:
            async with asyncio.timeout(self._timeout_seconds):
                stream = await self._llm.tape(self._tape_name).stream_events_async(**stream_kwargs)
                await self._relay(session, stream)
        except TimeoutError:
            raise ProviderError(f"model_timeout: no response within {self._timeout_seconds}s") from None

    async def _relay(self, session: EventBusSession, stream: Any) -> None:
        tool_names: dict[int, str] = {}
        streamed_text = False
        error_event: dict[str, Any] | None = None
        final_event: dict[str, Any] | None = None
        async for event in stream:
            kind = getattr(event, "kind", None)
            data = getattr(event, "data", None)
            if not isinstance(data, dict):
                continue
            if kind == "text":
                delta = data.get("delta")
                if isinstance(delta, str) and delta:
                    streamed_text = True
                    session.emit(TextDeltaEvent(delta=delta))
            elif kind == "tool_call":
                call = data.get("call")
                name = _tool_call_name(call)
                tool_names[data.get("index", len(tool_names))] = name
                if name in self._native_names:
                    logger.debug("republic.native_tool_call name={}", name)
                    continue
                call_id = call.get("id") if isinstance(call, dict) else None
                session.emit(ToolExecutionStartEvent(tool_name=name, call_id=call_id))
            elif kind == "tool_result":
                name = tool_names.get(data.get("index", -1), "unknown")
                if name not in self._native_names:
                    session.emit(ToolExecutionEndEvent(tool_name=name))
            elif kind == "error":
                error_event = data
            elif kind == "final":
                final_event = data

        stream_error = getattr(stream, "error", None)
        if stream_error is not None:
            raise ProviderError(_format_stream_error(stream_error))
        if error_event is not None or (final_event is not None and final_event.get("ok") is False):
            raise ProviderError(_format_error_event(error_event))
        if not streamed_text and final_event is not None:
            final_text = final_event.get("text")
            if isinstance(final_text, str) and final_text:
                logger.debug("republic.final_text_only chars={}", len(final_text))
                session.emit(TextDeltaEvent(delta=final_text))


def _tool_call_name(call: object) -> str:
    if not isinstance(call, dict):
        return "unknown"
    function = call.get("function")
    if isinstance(function, dict) and isinstance(function.get("name"), str):
        return function["name"]
    name = call.get("name")
    return name if isinstance(name, str) else "unknown"


def _format_stream_error(error: object) -> str:
    kind = getattr(error, "kind", None)
    message = getattr(error, "message", None)
    kind_value = getattr(kind, "value", kind)
    if isinstance(kind_value, str) and isinstance(message, str):
        return f"{kind_value}: {message}"
    if isinstance(message, str):
        return message
    return str(error)


def _format_error_event(error_event: dict[str, Any] | None) -> str:
    if error_event is None:
        return "stream_events_error: unknown"
    kind = error_event.get("kind")
    message = error_event.get("message")
    if isinstance(kind, str) and isinstance(message, str):
        return f"{kind}: {message}"
    if isinstance(message, str):
        return message
    return "stream_events_error: unknown"
