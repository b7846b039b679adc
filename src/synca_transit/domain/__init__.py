"""Domain layer - core models, exceptions and ports."""

from synca_transit.domain.models import (
    Coordinates,
    NearbyStation,
    RailwayRef,
    RailwayStatus,
    StationWithStatus,
    StatusKind,
)
from synca_transit.domain.ports import (
    Geolocator,
    RailwayResolver,
    StationLocator,
    StatusFetcher,
)

__all__ = [
    "Coordinates",
    "Geolocator",
    "NearbyStation",
    "RailwayRef",
    "RailwayResolver",
    "RailwayStatus",
    "StationLocator",
    "StationWithStatus",
    "StatusFetcher",
    "StatusKind",
]
