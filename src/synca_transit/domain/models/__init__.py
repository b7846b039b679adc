"""Domain models for nearby stations and railway statuses."""

from synca_transit.domain.models.alert_result import AlertResult
from synca_transit.domain.models.coordinates import Coordinates
from synca_transit.domain.models.error_details import ErrorDetails
from synca_transit.domain.models.nearby_snapshot import NearbySnapshot
from synca_transit.domain.models.railway import RailwayLine, RailwayRef
from synca_transit.domain.models.railway_status import (
    DEFAULT_STATUS_TEXTS,
    NORMAL_STATUS_TEXT,
    RailwayStatus,
    StatusKind,
)
from synca_transit.domain.models.station import NearbyStation, RawStation
from synca_transit.domain.models.station_with_status import StationWithStatus
from synca_transit.domain.models.train_information import TrainInformation

__all__ = [
    "DEFAULT_STATUS_TEXTS",
    "NORMAL_STATUS_TEXT",
    "AlertResult",
    "Coordinates",
    "ErrorDetails",
    "NearbySnapshot",
    "NearbyStation",
    "RailwayLine",
    "RailwayRef",
    "RailwayStatus",
    "RawStation",
    "StationWithStatus",
    "StatusKind",
    "TrainInformation",
]
