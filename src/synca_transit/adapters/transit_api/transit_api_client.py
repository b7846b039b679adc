"""Client for the transit JSON API served by this application.

Lets a NearbyAggregator run in another process (e.g. the CLI) against a
deployed server instead of calling the upstream services directly.
"""

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import aiohttp
from pydantic import BaseModel, ValidationError

from synca_transit.adapters.api_request_logger import log_api_request
from synca_transit.adapters.transit_api.schemas import (
    ApiEnvelope,
    RailwayStatusPayload,
    StationPayload,
    StationRailwaysPayload,
)
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import (
    Coordinates,
    ErrorDetails,
    RailwayRef,
    RailwayStatus,
    RawStation,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

NEARBY_STATIONS_PATH = "/api/transit/nearby-stations"
STATION_RAILWAYS_PATH = "/api/transit/station-railways"
TRAIN_INFO_PATH = "/api/transit/train-info"

NAME_SEPARATOR = ","

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _validate_items(model: type[PayloadT], data: Any, path: str) -> list[PayloadT]:
    try:
        return [model.model_validate(item) for item in data]
    except (ValidationError, TypeError) as e:
        raise UpstreamError(f"Malformed item in response from {path}: {e}") from e


class TransitApiClient:
    """Station locator, railway resolver and status fetcher over HTTP."""

    def __init__(
        self, session: "ClientSession", base_url: str, timeout_seconds: float = 20
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session used for requests.
            base_url: Base URL of the server, e.g. "http://localhost:8000".
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _get_envelope(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET a path and return the envelope's data, raising on failure."""
        url = f"{self._base_url}{path}"
        log_api_request("GET", url, params=params)

        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                body = await response.json(content_type=None)
                status = response.status
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.error(f"Error calling {url}: {e}")
            raise UpstreamError(f"Request to {path} failed: {e}") from e

        try:
            envelope = ApiEnvelope[Any].model_validate(body)
        except ValidationError as e:
            raise UpstreamError(f"Malformed response from {path}: {e}") from e

        if not envelope.success or envelope.data is None:
            raise UpstreamError(
                envelope.error or f"Request to {path} was not successful",
                ErrorDetails.from_status(status if status != 200 else None),
            )
        return envelope.data

    async def find_stations(self, location: Coordinates, radius_meters: int) -> list[RawStation]:
        """Stations within radius_meters of location, via /nearby-stations."""
        data = await self._get_envelope(
            NEARBY_STATIONS_PATH,
            {
                "lat": str(location.latitude),
                "lng": str(location.longitude),
                "radius": str(radius_meters),
            },
        )
        stations = _validate_items(StationPayload, data, NEARBY_STATIONS_PATH)
        return [item.to_domain() for item in stations]

    async def resolve_railways(self, station_names: list[str]) -> dict[str, list[RailwayRef]]:
        """Railways per station name, via /station-railways.

        Names travel comma separated, so a name containing a comma cannot be
        looked up and maps to an empty list without being sent.
        """
        queryable = [name for name in station_names if NAME_SEPARATOR not in name]
        if len(queryable) < len(station_names):
            logger.warning("Skipping station names containing a comma in railway lookup")
        if not queryable:
            return {name: [] for name in station_names}
        data = await self._get_envelope(
            STATION_RAILWAYS_PATH, {"names": NAME_SEPARATOR.join(queryable)}
        )
        entries = _validate_items(StationRailwaysPayload, data, STATION_RAILWAYS_PATH)
        resolved = {
            entry.station_name: [ref.to_domain() for ref in entry.railways] for entry in entries
        }
        return {name: resolved.get(name, []) for name in station_names}

    async def fetch_all_statuses(self) -> list[RailwayStatus]:
        """Status of every known railway, via /train-info."""
        data = await self._get_envelope(TRAIN_INFO_PATH)
        statuses = _validate_items(RailwayStatusPayload, data, TRAIN_INFO_PATH)
        return [item.to_domain() for item in statuses]
