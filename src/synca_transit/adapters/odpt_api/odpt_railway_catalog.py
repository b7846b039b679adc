"""Railway catalog adapter reading the ODPT odpt:Railway dump."""

import logging
from typing import Any

from synca_transit.adapters.odpt_api.constants import ODPT_RAILWAY_ENDPOINT
from synca_transit.adapters.odpt_api.http_client import OdptHttpClient
from synca_transit.domain.models import RailwayLine
from synca_transit.domain.ports import RailwayCatalog

logger = logging.getLogger(__name__)


def _station_name(entry: dict[str, Any]) -> str:
    """Japanese station title, or the last segment of the station id."""
    title = (entry.get("odpt:stationTitle") or {}).get("ja")
    if title:
        return title
    # odpt.Station:JR-East.Yamanote.Tokyo -> Tokyo
    station_id = entry.get("odpt:station") or ""
    return station_id.rsplit(".", 1)[-1]


def parse_railway(data: dict[str, Any]) -> RailwayLine | None:
    """Convert one odpt:Railway record; None if it has no id."""
    railway_id = data.get("owl:sameAs")
    if not railway_id:
        return None

    railway_name = (
        (data.get("odpt:railwayTitle") or {}).get("ja") or data.get("dc:title") or railway_id
    )
    station_order = sorted(
        (entry for entry in data.get("odpt:stationOrder") or [] if isinstance(entry, dict)),
        key=lambda entry: entry.get("odpt:index", 0),
    )
    return RailwayLine(
        railway_id=railway_id,
        railway_name=railway_name,
        operator=data.get("odpt:operator", ""),
        station_names=[name for name in map(_station_name, station_order) if name],
    )


class OdptRailwayCatalog(RailwayCatalog):
    """Bulk railway topology from ODPT."""

    def __init__(self, http_client: OdptHttpClient) -> None:
        """Initialize with an ODPT HTTP client."""
        self._http_client = http_client

    async def fetch_all_railways(self) -> list[RailwayLine]:
        """Return every railway ODPT publishes, with ordered station names."""
        records = await self._http_client.get(ODPT_RAILWAY_ENDPOINT)
        railways = [line for line in map(parse_railway, records) if line is not None]
        logger.info(f"Fetched {len(railways)} railways from ODPT")
        return railways
