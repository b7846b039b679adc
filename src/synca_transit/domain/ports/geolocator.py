"""Geolocator port."""

from typing import Protocol

from synca_transit.domain.models.coordinates import Coordinates


class Geolocator(Protocol):
    """Port for obtaining the current device position."""

    async def locate(self) -> Coordinates:
        """Return the current position or raise GeolocationError."""
        ...
