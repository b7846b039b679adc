"""Web adapter: the Starlette application and its background pollers."""

from synca_transit.adapters.web.app import create_app
from synca_transit.adapters.web.services import TransitServices, build_services

__all__ = ["TransitServices", "build_services", "create_app"]
