"""Status fetcher port."""

from typing import Protocol

from synca_transit.domain.models.railway_status import RailwayStatus


class StatusFetcher(Protocol):
    """Port for the current operational status of all known railway lines."""

    async def fetch_all_statuses(self) -> list[RailwayStatus]:
        """Return the status of every known line, unfiltered."""
        ...
