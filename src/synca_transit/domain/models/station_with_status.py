"""Station joined with the statuses of the lines serving it."""

from dataclasses import dataclass, field

from synca_transit.domain.models.railway_status import RailwayStatus
from synca_transit.domain.models.station import NearbyStation


@dataclass(frozen=True)
class StationWithStatus:
    """A nearby station annotated with its railway statuses, in status-source order."""

    station: NearbyStation
    railway_statuses: list[RailwayStatus] = field(default_factory=list)
