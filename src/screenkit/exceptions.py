"""Custom exception hierarchy for screenkit."""

from __future__ import annotations

from enum import StrEnum


class LocationErrorKind(StrEnum):
    """Why an acquisition cycle ended in the error state."""

    PERMISSION_DENIED = "permission_denied"
    ACQUISITION_FAILURE = "acquisition_failure"


class ScreenError(Exception):
    """Base exception for all screenkit errors."""


class ScreenConfigError(ScreenError):
    """Invalid or missing configuration."""


class LocationError(ScreenError):
    """An acquisition cycle could not produce a fix.

    ``state_message`` is the short text stored in the error state;
    ``title`` and ``notice`` are what the user sees in the blocking alert.
    """

    kind: LocationErrorKind = LocationErrorKind.ACQUISITION_FAILURE
    state_message: str = "location fetch failed"
    title: str = "Error"
    notice: str = "Could not get your location"


class PermissionDeniedError(LocationError):
    """Foreground location permission was not granted."""

    kind = LocationErrorKind.PERMISSION_DENIED
    state_message = "permission denied"
    title = "Permission denied"
    notice = "The app needs access to your location to work"


class LocationAcquisitionError(LocationError):
    """The provider failed to resolve a fix (timeout, disabled service, ...)."""


class ConnectivityCheckError(ScreenError):
    """The network state could not be sampled.

    Always recovered locally: connectivity simply stays unknown.
    """


class LockRequestError(ScreenError):
    """A rotation-lock request was rejected by the device.

    Recovered locally; the optimistic orientation is kept.
    """


class CatalogError(ScreenError):
    """HTTP-level failure while fetching the catalog (network, non-200, invalid JSON)."""

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
