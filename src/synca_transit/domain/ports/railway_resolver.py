"""Railway resolver port."""

from typing import Protocol

from synca_transit.domain.models.railway import RailwayRef


class RailwayResolver(Protocol):
    """Port for resolving station display names to the railways serving them."""

    async def resolve_railways(self, station_names: list[str]) -> dict[str, list[RailwayRef]]:
        """Return the railways for every requested name (empty list when unknown)."""
        ...
