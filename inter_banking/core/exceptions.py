"""Errors raised by the Inter banking client.

Every failure reaches the immediate caller as one of these exceptions.
Nothing in the client retries or swallows them.
"""
from __future__ import annotations

from typing import Optional


class InterError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str = "Inter API error"):
        self.message = message
        super().__init__(self.message)


class CredentialError(InterError):
    """Raised when the mTLS transport cannot be built from the given certificate."""

    def __init__(self, message: str = "Invalid or missing client certificate"):
        super().__init__(message)


class TransportError(InterError):
    """Raised when the HTTP round-trip itself fails."""

    def __init__(self, message: str = "Request to the Inter API failed"):
        super().__init__(message)


class RequestCancelledError(TransportError):
    """Raised when the caller's cancellation signal fires before a response arrives."""

    def __init__(self, message: str = "Request cancelled"):
        super().__init__(message)


class DeadlineExceededError(TransportError):
    """Raised when the per-call deadline expires before a response arrives."""

    def __init__(self, message: str = "Request deadline exceeded"):
        super().__init__(message)


class AuthError(InterError):
    """Raised when the token endpoint rejects the client or answers garbage.

    The message is the raw response body, which is the provider's own
    diagnostic.
    """

    def __init__(self, message: str = "Authorization failed", status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ApiError(InterError):
    """Raised when a banking endpoint answers with a non-200 status."""

    def __init__(self, body: str, status_code: Optional[int] = None):
        self.body = body
        self.status_code = status_code
        super().__init__(body)


class ParseError(InterError):
    """Raised when a 200 response does not match the expected payload shape."""

    def __init__(self, message: str = "Could not parse API response"):
        super().__init__(message)
