"""Custom exception hierarchy for yardwatch."""

from __future__ import annotations


class YardError(Exception):
    """Base exception for all yardwatch errors."""


class YardConfigError(YardError):
    """Invalid or missing configuration."""


class YardIngestError(YardError):
    """A batch upload could not be read at all (unsupported or unreadable file).

    Individual unparsable fields never raise; they degrade to NaN or a
    synthesized id instead.
    """


class YardTransportError(YardError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class YardDecodeError(YardTransportError):
    """Response arrived but did not have the expected shape."""
