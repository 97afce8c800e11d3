"""Native web search provenance policy.

A turn passes only when no local tool ran, the model did not report native
search as unavailable, the text carries no fallback disclaimer, and at least
one source URL is cited. Rules run in order and the first rejection wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from loguru import logger

from vouch.capture import TurnCapture
from vouch.errors import PolicyRejectedError
from vouch.prompts import NATIVE_WEB_SEARCH_UNAVAILABLE

FALLBACK_INDICATORS: tuple[str, ...] = (
    "don't have native web search",
    "do not have native web search",
    "no native web search",
    "cannot access the web",
    "can't access the web",
    "using command-line tools",
    "using the bash tool",
    "native web search is unavailable",
)
URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)


class RejectionReason(str, Enum):
    LOCAL_TOOLS_USED = "local_tools_used"
    CAPABILITY_REPORTED_UNAVAILABLE = "capability_reported_unavailable"
    FALLBACK_LANGUAGE_DETECTED = "fallback_language_detected"
    NO_SOURCES_CITED = "no_sources_cited"


@dataclass(frozen=True)
class Accepted:
    text: str

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    detail: str
    tools: tuple[str, ...] = ()
    phrase: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.tools:
            return f"{self.detail}: {', '.join(self.tools)}"
        if self.phrase is not None:
            return f"{self.detail} (matched {self.phrase!r})"
        return self.detail


PolicyVerdict = Union[Accepted, Rejected]


@dataclass(frozen=True)
class PolicyRule:
    name: str
    check: Callable[[TurnCapture], Optional[Rejected]]


def _local_tools(result: TurnCapture) -> Optional[Rejected]:
    if not result.used_tools:
        return None
    return Rejected(
        RejectionReason.LOCAL_TOOLS_USED,
        "native web search required, but local tools were used",
        tools=tuple(result.used_tools_sorted),
    )


def _unavailable_sentinel(result: TurnCapture) -> Optional[Rejected]:
    if NATIVE_WEB_SEARCH_UNAVAILABLE not in result.text:
        return None
    return Rejected(
        RejectionReason.CAPABILITY_REPORTED_UNAVAILABLE,
        "model reported that native web search is unavailable",
    )


def _fallback_language(result: TurnCapture) -> Optional[Rejected]:
    lowered = result.text.lower()
    for phrase in FALLBACK_INDICATORS:
        if phrase in lowered:
            return Rejected(
                RejectionReason.FALLBACK_LANGUAGE_DETECTED,
                "model response indicates native web search was unavailable",
                phrase=phrase,
            )
    return None


def _source_urls(result: TurnCapture) -> Optional[Rejected]:
    if URL_PATTERN.search(result.text):
        return None
    return Rejected(
        RejectionReason.NO_SOURCES_CITED,
        "no source URLs were returned; refusing unverified output",
    )


DEFAULT_RULES: tuple[PolicyRule, ...] = (
    PolicyRule("local_tools", _local_tools),
    PolicyRule("unavailable_sentinel", _unavailable_sentinel),
    PolicyRule("fallback_language", _fallback_language),
    PolicyRule("source_urls", _source_urls),
)


def verify(result: TurnCapture, rules: Sequence[PolicyRule] = DEFAULT_RULES) -> PolicyVerdict:
    """Apply ``rules`` in order; the first rejection wins."""
    for rule in rules:
        rejected = rule.check(result)
        if rejected is not None:
            logger.warning("policy.rejected rule={} reason={}", rule.name, rejected.reason.value)
            return rejected
    logger.info("policy.accepted text_chars={}", len(result.text))
    return Accepted(result.text)


def require_accepted(verdict: PolicyVerdict) -> str:
    """Return the accepted text or raise ``PolicyRejectedError``."""
    if isinstance(verdict, Rejected):
        raise PolicyRejectedError(verdict)
    return verdict.text


def extract_source_urls(text: str) -> list[str]:
    """Cited URLs in order of first appearance."""
    seen: dict[str, None] = {}
    for match in URL_PATTERN.finditer(text):
        seen.setdefault(match.group(0).rstrip(".,;:)]}>\"'"), None)
    return list(seen)
