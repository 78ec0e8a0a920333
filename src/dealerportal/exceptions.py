"""Custom exception hierarchy for dealerportal."""

from __future__ import annotations


class DealerPortalError(Exception):
    """Base exception for all dealerportal errors."""


class DealerPortalConfigError(DealerPortalError):
    """Invalid or missing configuration."""


class DirectoryTransportError(DealerPortalError):
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


class DirectoryApiError(DealerPortalError):
    """The directory rejected the request (application-level error)."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
    ) -> None:
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class DealerNotFoundError(DirectoryApiError):
    """No dealer record matched the lookup."""


class DirectoryRemoteError(DirectoryApiError):
    """The backend refused a write (e.g. a car status update)."""


class AuthInvalidError(DealerPortalError):
    """Persisted dealer identifier is missing or failed remote validation."""


class LookupFailedError(DealerPortalError):
    """Login by secondary identifier found no matching dealer.

    The message is always the fixed, user-facing text; the underlying
    directory error is chained as ``__cause__``.
    """


class LoadFailedError(DealerPortalError):
    """Inventory fetch failed."""


class UpdateFailedError(DealerPortalError):
    """Car status toggle failed."""
