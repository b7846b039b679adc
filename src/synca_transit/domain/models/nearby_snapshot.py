"""Observable state of a nearby-station aggregation session."""

from dataclasses import dataclass, field
from datetime import datetime

from synca_transit.domain.models.coordinates import Coordinates
from synca_transit.domain.models.station_with_status import StationWithStatus


@dataclass(frozen=True)
class NearbySnapshot:
    """Immutable view of what a nearby-stations screen should render."""

    current_location: Coordinates | None = None
    stations: list[StationWithStatus] = field(default_factory=list)
    is_loading_location: bool = False
    is_loading_stations: bool = False
    is_loading_status: bool = False
    location_error: str | None = None
    station_error: str | None = None
    last_updated: datetime | None = None
    generation: int = 0
