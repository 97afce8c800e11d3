"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys
from logging import Handler
from typing import Literal, TextIO

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "cli"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "cli": "{extra[turn]} | {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[turn]} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None


def _build_sink(profile: LogProfile) -> Handler | TextIO:
    if profile == "cli":
        return RichHandler(
            console=get_console(),
            show_level=True,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
    return sys.stderr


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Configure process-level logging once per profile.

    Every record carries the id of the turn being captured, or ``-``.
    """
    from vouch.capture import current_turn

    def inject_context(record: loguru.Record) -> None:
        record["extra"]["turn"] = current_turn()

    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    logger.remove()
    logger.add(
        _build_sink(profile),
        level=(level or os.getenv("VOUCH_LOG_LEVEL", "INFO")).upper(),
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
    )
    logger.configure(patcher=inject_context)
    _CONFIGURED_PROFILE = profile
