"""Vouch - capture agent turns and vouch for their sources."""

from .capture import TurnCapture, capture
from .policy import Accepted, PolicyVerdict, Rejected, RejectionReason, require_accepted, verify
from .session import AgentSession, EventBusSession, PromptOptions

__version__ = "0.1.0"

__all__ = [
    "Accepted",
    "AgentSession",
    "EventBusSession",
    "PolicyVerdict",
    "PromptOptions",
    "Rejected",
    "RejectionReason",
    "TurnCapture",
    "capture",
    "require_accepted",
    "verify",
]
