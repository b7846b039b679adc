"""HTTP routes."""

from synca_transit.adapters.web.routes import cron_routes, transit_routes

routes = [*transit_routes.routes, *cron_routes.routes]

__all__ = ["routes"]
