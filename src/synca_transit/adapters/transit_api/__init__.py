"""Client and wire schemas for the transit JSON API."""

from synca_transit.adapters.transit_api.transit_api_client import TransitApiClient

__all__ = ["TransitApiClient"]
