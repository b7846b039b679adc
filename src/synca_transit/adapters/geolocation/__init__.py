"""Geolocation adapters."""

from synca_transit.adapters.geolocation.static_geolocator import StaticGeolocator

__all__ = ["StaticGeolocator"]
