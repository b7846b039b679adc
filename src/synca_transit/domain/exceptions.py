"""Exceptions raised across the nearby-station pipeline."""

from enum import StrEnum

from synca_transit.domain.models.error_details import ErrorDetails


class SyncaError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SyncaError):
    """A required setting is missing or invalid."""


class UpstreamError(SyncaError):
    """An external service could not be reached or answered with an error."""

    def __init__(self, message: str, details: ErrorDetails | None = None) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails.from_status(None)


class GeolocationErrorKind(StrEnum):
    """Why the device position could not be obtained."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


GEOLOCATION_ERROR_MESSAGES: dict[GeolocationErrorKind, str] = {
    GeolocationErrorKind.PERMISSION_DENIED: "Location access has not been permitted",
    GeolocationErrorKind.POSITION_UNAVAILABLE: "Your location is currently unavailable",
    GeolocationErrorKind.TIMEOUT: "Timed out while getting your location",
    GeolocationErrorKind.UNSUPPORTED: "Location is not supported on this device",
}


class GeolocationError(SyncaError):
    """The device position could not be obtained."""

    def __init__(self, kind: GeolocationErrorKind, message: str | None = None) -> None:
        super().__init__(message or GEOLOCATION_ERROR_MESSAGES[kind])
        self.kind = kind

    @property
    def user_message(self) -> str:
        """Message suitable for showing to the end user."""
        return GEOLOCATION_ERROR_MESSAGES[self.kind]
