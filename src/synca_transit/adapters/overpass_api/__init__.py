"""Overpass API (OpenStreetMap) adapter."""

from synca_transit.adapters.overpass_api.overpass_station_locator import (
    OverpassStationLocator,
)

__all__ = ["OverpassStationLocator"]
