"""Custom exception hierarchy for pyacurite."""

from __future__ import annotations

from typing import Any


class AcuriteError(Exception):
    """Base exception for all pyacurite errors."""


class AcuriteConfigError(AcuriteError):
    """Invalid or missing configuration.

    Also raised when the account id can neither be taken from the
    configuration nor from the login response.
    """


class AcuriteTransportError(AcuriteError):
    """Network-level failure (connection error, timeout)."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class AcuriteApiError(AcuriteError):
    """The API answered with a non-2xx status or an unusable body."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        detail: str = "",
        endpoint: str = "",
    ) -> None:
        self.status = status
        self.detail = detail
        self.endpoint = endpoint
        super().__init__(message)


class AcuriteAuthenticationError(AcuriteApiError):
    """Login rejected or session token no longer accepted."""


class AcuriteValueParseError(AcuriteError):
    """A sensor reading value is not numeric.

    Local to a single channel update; never aborts a poll cycle.
    """

    def __init__(self, message: str, *, key: str = "", value: Any = None) -> None:
        self.key = key
        self.value = value
        super().__init__(message)
