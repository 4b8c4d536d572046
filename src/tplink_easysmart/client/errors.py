"""Custom exceptions for the tplink-easysmart HTTP client."""

from __future__ import annotations


class TPLinkError(Exception):
    """Base exception for all tplink-easysmart errors."""


class TPLinkAuthError(TPLinkError):
    """Raised when the switch does not issue a session cookie on login."""


class TPLinkSessionError(TPLinkError):
    """Raised when an authenticated request is attempted without a session."""


class TPLinkRequestError(TPLinkError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class TPLinkResponseError(TPLinkError):
    """Raised when the switch answers with any HTTP status other than 200."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url!r}")


class TPLinkParseError(TPLinkError):
    """Raised when an expected script variable is not found in a page."""
