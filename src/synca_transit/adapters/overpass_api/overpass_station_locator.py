"""Station locator backed by the Overpass API (OpenStreetMap).

API Documentation: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from synca_transit.adapters.api_rate_limiter import ApiRateLimiter
from synca_transit.adapters.api_request_logger import log_api_request
from synca_transit.adapters.overpass_api.constants import (
    DEFAULT_OVERPASS_API_URL,
    EXCLUDED_NETWORKS,
    EXCLUDED_STATION_NAMES,
    EXCLUDED_STATION_PATTERNS,
    USER_AGENT,
)
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import Coordinates, ErrorDetails, RawStation
from synca_transit.domain.ports import StationLocator

logger = logging.getLogger(__name__)

DEFAULT_BACK_OFF_SECONDS = 30.0

if TYPE_CHECKING:
    from aiohttp import ClientSession


def build_station_query(location: Coordinates, radius_meters: int) -> str:
    """Build an Overpass QL query for stations and halts around a position."""
    around = f"around:{radius_meters},{location.latitude},{location.longitude}"
    return (
        "[out:json][timeout:10];\n"
        "(\n"
        f'  node["railway"="station"]({around});\n'
        f'  node["railway"="halt"]({around});\n'
        f'  way["railway"="station"]({around});\n'
        ");\n"
        "out center body;"
    )


def exclusion_reason(name: str, network: str) -> str | None:
    """Return why a station is excluded, or None if it should be kept."""
    if network and any(excluded in network for excluded in EXCLUDED_NETWORKS):
        return f"network: {network}"
    if name in EXCLUDED_STATION_NAMES:
        return "excluded station name"
    if any(pattern in name for pattern in EXCLUDED_STATION_PATTERNS):
        return "station name pattern"
    return None


def parse_elements(elements: list[dict[str, Any]]) -> list[RawStation]:
    """Convert Overpass elements to stations, dropping unusable and excluded ones."""
    stations: list[RawStation] = []
    for element in elements:
        if not isinstance(element, dict):
            continue

        center = element.get("center") or {}
        lat = element.get("lat", center.get("lat"))
        lon = element.get("lon", center.get("lon"))
        if lat is None or lon is None:
            continue

        tags = element.get("tags") or {}
        name = tags.get("name:ja") or tags.get("name")
        if not name:
            continue

        network = tags.get("network") or ""
        reason = exclusion_reason(name, network)
        if reason:
            logger.debug(f"Excluding {name} ({reason})")
            continue

        stations.append(
            RawStation(
                id=str(element.get("id", "")),
                name=name,
                coordinates=Coordinates(latitude=float(lat), longitude=float(lon)),
                operator=tags.get("operator"),
                network=tags.get("network"),
            )
        )
    return stations


def _retry_after(header: str | None) -> float:
    """Seconds from a Retry-After header, falling back to DEFAULT_BACK_OFF_SECONDS."""
    try:
        return max(0.0, float(header)) if header else DEFAULT_BACK_OFF_SECONDS
    except ValueError:
        return DEFAULT_BACK_OFF_SECONDS


class OverpassStationLocator(StationLocator):
    """Finds railway stations around a position using OpenStreetMap data."""

    def __init__(
        self,
        session: "ClientSession",
        api_url: str = DEFAULT_OVERPASS_API_URL,
        timeout_seconds: float = 15,
        min_delay_seconds: float = 1.0,
    ) -> None:
        """Initialize the locator.

        Args:
            session: aiohttp session used for requests.
            api_url: Overpass interpreter endpoint.
            timeout_seconds: Total timeout per request.
            min_delay_seconds: Minimum delay between requests to the same endpoint.
        """
        self._session = session
        self._api_url = api_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._min_delay_seconds = min_delay_seconds
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        """Get the shared rate limiter for the Overpass endpoint."""
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                f"overpass:{self._api_url}", self._min_delay_seconds
            )
        return self._rate_limiter

    async def find_stations(self, location: Coordinates, radius_meters: int) -> list[RawStation]:
        """Return stations within radius_meters of location.

        Raises:
            UpstreamError: If Overpass cannot be reached or answers with an error.
        """
        query = build_station_query(location, radius_meters)
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": USER_AGENT,
        }
        log_api_request("POST", self._api_url, headers=headers, payload=query)

        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()

        try:
            async with self._session.post(
                self._api_url, data={"data": query}, headers=headers, timeout=self._timeout
            ) as response:
                if response.status == 429:
                    rate_limiter.back_off(_retry_after(response.headers.get("Retry-After")))
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Overpass API returned status {response.status}: {error_text[:200]}"
                    )
                    raise UpstreamError(
                        f"Overpass API error: {response.status}",
                        ErrorDetails.from_status(response.status),
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Overpass fetch error: {e}")
            raise UpstreamError(f"Overpass API fetch failed: {e}") from e

        elements = data.get("elements", []) if isinstance(data, dict) else []
        stations = parse_elements(elements)
        logger.info(
            f"Overpass: {len(stations)} stations within {radius_meters}m of "
            f"{location.latitude},{location.longitude}"
        )
        return stations
