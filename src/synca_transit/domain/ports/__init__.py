"""Ports (interfaces) for the ports-and-adapters architecture."""

from synca_transit.domain.ports.geolocator import Geolocator
from synca_transit.domain.ports.notifier import Notifier
from synca_transit.domain.ports.railway_catalog import RailwayCatalog
from synca_transit.domain.ports.railway_resolver import RailwayResolver
from synca_transit.domain.ports.station_locator import StationLocator
from synca_transit.domain.ports.status_fetcher import StatusFetcher
from synca_transit.domain.ports.train_information_source import TrainInformationSource

__all__ = [
    "Geolocator",
    "Notifier",
    "RailwayCatalog",
    "RailwayResolver",
    "StationLocator",
    "StatusFetcher",
    "TrainInformationSource",
]
