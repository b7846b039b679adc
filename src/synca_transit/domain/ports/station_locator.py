"""Station locator port."""

from typing import Protocol

from synca_transit.domain.models.coordinates import Coordinates
from synca_transit.domain.models.station import RawStation


class StationLocator(Protocol):
    """Port for discovering railway stations around a position."""

    async def find_stations(self, location: Coordinates, radius_meters: int) -> list[RawStation]:
        """Return the stations within radius_meters of location, in no particular order."""
        ...
