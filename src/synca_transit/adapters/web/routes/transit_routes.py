"""Transit API routes: nearby stations, station railways, train information."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.routing import Route

from synca_transit.adapters.geolocation import StaticGeolocator
from synca_transit.adapters.transit_api.schemas import (
    RailwayRefPayload,
    RailwayStatusPayload,
    StationPayload,
    StationWithStatusPayload,
)
from synca_transit.adapters.web.routes.responses import error_response, success_response
from synca_transit.application.services import NearbyAggregator
from synca_transit.domain.models import Coordinates

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from synca_transit.adapters.config import AppConfig
    from synca_transit.adapters.web.services import TransitServices

logger = logging.getLogger(__name__)


class InvalidParameterError(ValueError):
    """A query parameter is missing or malformed."""


def _services(request: Request) -> TransitServices:
    return request.app.state.services


def _config(request: Request) -> AppConfig:
    return request.app.state.config


def _float_param(request: Request, name: str) -> float:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        raise InvalidParameterError(f"Missing parameter: {name}")
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidParameterError(f"Invalid number for {name}: {raw}") from e


def _coordinates(request: Request) -> Coordinates:
    lat = _float_param(request, "lat")
    lng = _float_param(request, "lng")
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise InvalidParameterError(f"Coordinates out of range: {lat},{lng}")
    return Coordinates(latitude=lat, longitude=lng)


def _csv_param(request: Request, name: str) -> list[str]:
    values = [v.strip() for v in request.query_params.get(name, "").split(",")]
    values = [v for v in values if v]
    if not values:
        raise InvalidParameterError(f"Missing parameter: {name}")
    return values


async def nearby_stations(request: Request) -> Response:
    """Stations around lat/lng within radius meters (default from config)."""
    config = _config(request)
    try:
        location = _coordinates(request)
        radius = config.search_radius_meters
        if request.query_params.get("radius"):
            radius = int(_float_param(request, "radius"))
    except InvalidParameterError as e:
        return error_response(str(e), 400)

    try:
        stations = await _services(request).station_locator.find_stations(location, radius)
    except Exception as e:
        logger.error(f"Nearby station search failed: {e}")
        return error_response("Failed to fetch nearby stations", 500)

    data = [
        StationPayload.from_domain(s).model_dump(by_alias=True, exclude_none=True)
        for s in stations
    ]
    return success_response(data, count=len(data))


async def station_railways(request: Request) -> Response:
    """Railways serving each of the comma separated station names.

    Names are split on every comma; a station name containing one cannot be queried.
    """
    try:
        names = _csv_param(request, "names")
    except InvalidParameterError as e:
        return error_response(str(e), 400)

    try:
        resolved = await _services(request).railway_resolver.resolve_railways(names)
    except Exception as e:
        logger.error(f"Railway lookup failed: {e}")
        return error_response("Failed to look up station railways", 500)

    data = [
        {
            "stationName": name,
            "railways": [
                RailwayRefPayload.from_domain(ref).model_dump(by_alias=True)
                for ref in resolved.get(name, [])
            ],
        }
        for name in names
    ]
    return success_response(data)


async def train_info(request: Request) -> Response:
    """Status of every known railway."""
    try:
        statuses = await _services(request).train_info.fetch_all_statuses()
    except Exception as e:
        logger.error(f"Train information fetch failed: {e}")
        return error_response("Failed to fetch train information", 500)

    data = [
        RailwayStatusPayload.from_domain(s).model_dump(
            by_alias=True, mode="json", exclude_none=True
        )
        for s in statuses
    ]
    return success_response(data, with_timestamp=True)


async def nearby_status(request: Request) -> Response:
    """Short status entries keyed by railway id."""
    try:
        railway_ids = _csv_param(request, "railways")
    except InvalidParameterError as e:
        return error_response(str(e), 400)

    try:
        data = await _services(request).train_info.statuses_for(railway_ids)
    except Exception as e:
        logger.error(f"Status lookup failed: {e}")
        return error_response("Failed to fetch railway statuses", 500)
    return success_response(data, with_timestamp=True)


async def nearby(request: Request) -> Response:
    """One full aggregation run for the given position."""
    try:
        location = _coordinates(request)
    except InvalidParameterError as e:
        return error_response(str(e), 400)

    services = _services(request)
    aggregator = NearbyAggregator(
        geolocator=StaticGeolocator(location),
        station_locator=services.station_locator,
        railway_resolver=services.railway_resolver,
        status_fetcher=services.train_info,
        settings=_config(request).aggregator_settings(),
    )
    async with aggregator:
        snapshot = await aggregator.start()

    if snapshot.location_error:
        return error_response(snapshot.location_error, 400)
    if snapshot.station_error:
        return error_response(snapshot.station_error, 500)

    data = [
        StationWithStatusPayload.from_domain(entry).model_dump(
            by_alias=True, mode="json", exclude_none=True
        )
        for entry in snapshot.stations
    ]
    return success_response(data, count=len(data), with_timestamp=True)


routes = [
    Route("/api/transit/nearby-stations", nearby_stations, methods=["GET"]),
    Route("/api/transit/station-railways", station_railways, methods=["GET"]),
    Route("/api/transit/train-info", train_info, methods=["GET"]),
    Route("/api/transit/nearby-status", nearby_status, methods=["GET"]),
    Route("/api/transit/nearby", nearby, methods=["GET"]),
]
