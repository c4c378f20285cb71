"""
Exception hierarchy for the FCM integration.

Every failure raised by the client derives from ``FCMError`` so callers can
catch the whole family, while each subclass names one distinct cause:
missing setup, an oversized batch, a rejected request, an unreadable
response, or a transport failure.
"""

from __future__ import annotations

from typing import Any


class FCMError(Exception):
    """Base class for errors raised by the FCM client."""

    def __init__(self, message: str, status: str | None = None, raw: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.raw = raw


class ConfigurationMissingError(FCMError):
    """No server key could be resolved, or a required setting is unset."""


class BatchSizeExceededError(FCMError):
    """Too many tokens for a single batch call."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"FCM: Register APNS: tokens count should be less or equal {limit}, got {count}"
        )
        self.count = count
        self.limit = limit


class RemoteValidationError(FCMError):
    """The remote service answered with a non-2xx HTTP status."""

    def __init__(self, status_code: int, body: str | None = None, url: str | None = None) -> None:
        super().__init__(
            f"FCM request failed: HTTP {status_code}",
            status=str(status_code),
            raw=body,
        )
        self.status_code = status_code
        self.body = body
        self.url = url


class DecodingError(FCMError):
    """The response body did not match the documented envelope."""


class FCMTransportError(FCMError):
    """The request never produced an HTTP response (timeout, connect error)."""
