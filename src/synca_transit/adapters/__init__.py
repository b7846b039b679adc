"""Adapters layer - external system integrations."""

from synca_transit.adapters.config import AppConfig
from synca_transit.adapters.geolocation import StaticGeolocator
from synca_transit.adapters.jreast_api import JrEastTrainInformationSource
from synca_transit.adapters.odpt_api import (
    OdptHttpClient,
    OdptRailwayCatalog,
    OdptTrainInformationSource,
)
from synca_transit.adapters.overpass_api import OverpassStationLocator
from synca_transit.adapters.transit_api import TransitApiClient

__all__ = [
    "AppConfig",
    "JrEastTrainInformationSource",
    "OdptHttpClient",
    "OdptRailwayCatalog",
    "OdptTrainInformationSource",
    "OverpassStationLocator",
    "StaticGeolocator",
    "TransitApiClient",
]
