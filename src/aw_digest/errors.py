"""Error types raised while building a summary."""

from __future__ import annotations

from typing import Optional


class AwDigestError(Exception):
    """Base class for all failures that abort a summary run."""


class TransportError(AwDigestError):
    """The ActivityWatch server could not be reached or returned a non-success status."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ConfigurationError(AwDigestError):
    """Required buckets are missing or duplicated, or settings are invalid."""


class InputFormatError(AwDigestError):
    """A day selector did not match an accepted format."""
