"""Railway catalog port."""

from typing import Protocol

from synca_transit.domain.models.railway import RailwayLine


class RailwayCatalog(Protocol):
    """Port for the bulk railway line topology dump."""

    async def fetch_all_railways(self) -> list[RailwayLine]:
        """Return every known railway line with its ordered stations."""
        ...
