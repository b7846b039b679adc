"""Application services (use cases) for nearby stations and railway statuses."""

from synca_transit.application.services.delay_alert_service import DelayAlertService
from synca_transit.application.services.distance import distance_meters, format_distance
from synca_transit.application.services.nearby_aggregator import (
    AggregatorSettings,
    NearbyAggregator,
    rank_stations,
)
from synca_transit.application.services.railway_index import RailwayIndex, lookup_railways
from synca_transit.application.services.status_matching import (
    attach_statuses,
    railway_ids_match,
)
from synca_transit.application.services.train_info_service import StatusFeed, TrainInfoService

__all__ = [
    "AggregatorSettings",
    "DelayAlertService",
    "NearbyAggregator",
    "RailwayIndex",
    "StatusFeed",
    "TrainInfoService",
    "attach_statuses",
    "distance_meters",
    "format_distance",
    "lookup_railways",
    "railway_ids_match",
    "rank_stations",
]
