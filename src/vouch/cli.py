"""Vouch command line."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from vouch.capture import capture
from vouch.config import Settings, load_settings
from vouch.errors import ConfigurationError, ImageError, PolicyRejectedError, ProviderError
from vouch.images import load_image
from vouch.integrations.republic_client import build_session
from vouch.logging_utils import configure_logging
from vouch.policy import require_accepted, verify
from vouch.prompts import IMAGE_DESCRIPTION_PROMPT, weather_prompt
from vouch.session import AgentSession, ImageContent, PromptOptions

EXIT_REJECTED = 1
EXIT_USAGE = 2

app = typer.Typer(name="vouch", help="Capture agent turns and vouch for their sources.", add_completion=False)
console = Console()


def _print_section(title: str, text: str) -> None:
    console.print(f"=== {title} ===", markup=False, soft_wrap=True)
    console.print(text or "(No response text)", markup=False, soft_wrap=True)
    console.print()


def _fail(message: str, code: int) -> NoReturn:
    console.print(message, style="bold red", markup=False, soft_wrap=True)
    raise typer.Exit(code)


def _prepare(image: Optional[Path]) -> tuple[Settings, AgentSession, Optional[ImageContent]]:
    try:
        settings = load_settings()
        configure_logging(profile="cli", level=settings.log_level)
        attachment = load_image(image) if image is not None else None
        session = build_session(settings)
    except (ConfigurationError, ImageError) as exc:
        _fail(str(exc), EXIT_USAGE)
    except ValidationError as exc:
        _fail(f"Invalid configuration: {exc}", EXIT_USAGE)
    return settings, session, attachment


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except PolicyRejectedError as exc:
        _fail(f"Rejected ({exc.verdict.reason.value}): {exc}", EXIT_REJECTED)
    except ProviderError as exc:
        _fail(f"Provider error: {exc}", EXIT_REJECTED)


async def _ask(session: AgentSession, prompt: str, options: Optional[PromptOptions], verify_sources: bool) -> None:
    try:
        result = await capture(session, prompt, options)
        text = require_accepted(verify(result)) if verify_sources else result.text
        _print_section("Response", text)
    finally:
        session.dispose()


async def _weather(
    session: AgentSession,
    *,
    city: str,
    days: int,
    start: date,
    image: Optional[ImageContent],
) -> None:
    try:
        if image is not None:
            described = await capture(session, IMAGE_DESCRIPTION_PROMPT, PromptOptions(images=[image]))
            _print_section("Image Description", described.text)

        forecast = await capture(session, weather_prompt(city, start, days))
        _print_section(f"{city} Weather (Next {days} Days)", require_accepted(verify(forecast)))
    finally:
        session.dispose()


@app.command("ask")
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send."),
    image: Optional[Path] = typer.Option(None, "--image", help="Attach an image file."),
    verify_sources: bool = typer.Option(False, "--verify", help="Require native web search with cited sources."),
) -> None:
    """Run one captured turn and print the response."""
    _, session, attachment = _prepare(image)
    options = PromptOptions(images=[attachment]) if attachment is not None else None
    _run(_ask(session, prompt, options, verify_sources))


@app.command("weather")
def weather(
    city: Optional[str] = typer.Option(None, "--city", help="City to forecast."),
    days: Optional[int] = typer.Option(None, "--days", min=1, help="Number of forecast days."),
    image: Optional[Path] = typer.Option(None, "--image", help="Describe this image first."),
) -> None:
    """Describe an optional image, then fetch a verified forecast via native web search."""
    settings, session, attachment = _prepare(image)
    _run(
        _weather(
            session,
            city=city or settings.city,
            days=days or settings.forecast_days,
            start=date.today(),
            image=attachment,
        )
    )
