"""Application-level exception types for Vouch."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vouch.policy import Rejected


class VouchError(Exception):
    """Base exception for Vouch."""


class ConfigurationError(VouchError):
    """Base exception for configuration and startup validation errors."""


class InvalidModelFormatError(ConfigurationError):
    """Raised when model format is not provider:model."""


class ApiKeyNotConfiguredError(ConfigurationError):
    """Raised when an API key is required but missing."""


class SessionDisposedError(VouchError):
    """Raised when a disposed session is used for another turn."""


class ProviderError(VouchError):
    """Raised when the model provider fails to produce a response."""


class PolicyRejectedError(VouchError):
    """Raised by callers that treat a rejected verdict as a hard stop."""

    def __init__(self, verdict: Rejected) -> None:
        super().__init__(verdict.message)
        self.verdict = verdict


class ImageError(VouchError):
    """Base exception for image attachment errors."""


class ImageNotFoundError(ImageError):
    """Raised when an image path does not exist."""


class UnsupportedImageError(ImageError):
    """Raised when an image extension has no known MIME type."""
