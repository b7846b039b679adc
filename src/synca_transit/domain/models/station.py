"""Station domain models."""

from dataclasses import dataclass

from synca_transit.domain.models.coordinates import Coordinates


@dataclass(frozen=True)
class RawStation:
    """A station point as returned by a station locator, before ranking."""

    id: str
    name: str
    coordinates: Coordinates
    operator: str | None = None
    network: str | None = None


@dataclass(frozen=True)
class NearbyStation:
    """A station ranked by its distance from the current location."""

    id: str
    name: str
    coordinates: Coordinates
    distance_meters: float
