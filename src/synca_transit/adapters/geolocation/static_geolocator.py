"""Geolocators for positions known up front."""

from synca_transit.domain.exceptions import GeolocationError, GeolocationErrorKind
from synca_transit.domain.models import Coordinates
from synca_transit.domain.ports import Geolocator


class StaticGeolocator(Geolocator):
    """Returns a position supplied by the caller (query string, CLI flags)."""

    def __init__(self, coordinates: Coordinates | None) -> None:
        self._coordinates = coordinates

    def update(self, coordinates: Coordinates | None) -> None:
        """Replace the position reported by the next locate()."""
        self._coordinates = coordinates

    async def locate(self) -> Coordinates:
        if self._coordinates is None:
            raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE)
        lat, lng = self._coordinates.latitude, self._coordinates.longitude
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise GeolocationError(
                GeolocationErrorKind.POSITION_UNAVAILABLE, f"Invalid coordinates: {lat},{lng}"
            )
        return self._coordinates
