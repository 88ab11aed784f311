"""Domain-level exception hierarchy for the discovery and scouting layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NetworkError(DomainError):
    """Raised on transport failures: DNS, connect, timeout or a non-success status."""


class ParseError(DomainError):
    """Raised when a payload or a single element cannot be interpreted."""


class SubmissionError(DomainError):
    """Raised when the backend rejects a scout submission.

    The message is meant to be shown to the user as-is.
    """

    default_message = "Failed to save gym."

    def __init__(self, message: str | None = None, *, status_code: int | None = None):
        super().__init__(message or self.default_message)
        self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)
