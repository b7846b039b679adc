"""Station name to railway reverse-index built from the railway catalog.

The index maps a station's display name to the railways whose station order
includes it. It is built from one bulk catalog fetch, kept for a fixed
time-to-live and rebuilt on the first access after it expires. Concurrent
callers that arrive while a build is running share that build.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from synca_transit.domain.models import RailwayLine, RailwayRef

if TYPE_CHECKING:
    from synca_transit.domain.ports import RailwayCatalog

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60

_STATION_SUFFIX = re.compile(r"\s*(?:駅|station)$", re.IGNORECASE)

RailwayIndexMap = dict[str, list[RailwayRef]]


def strip_station_suffix(name: str) -> str:
    """Remove a trailing "駅" or "Station" from a station name."""
    return _STATION_SUFFIX.sub("", name.strip())


def build_index(railways: list[RailwayLine]) -> RailwayIndexMap:
    """Register every line under each of its station names, one entry per railway id."""
    index: RailwayIndexMap = {}
    for line in railways:
        ref = RailwayRef(
            railway_id=line.railway_id,
            railway_name=line.railway_name,
            operator=line.operator,
        )
        for station_name in line.station_names:
            if not station_name:
                continue
            refs = index.setdefault(station_name, [])
            if all(existing.railway_id != ref.railway_id for existing in refs):
                refs.append(ref)
    return index


def lookup_railways(index: RailwayIndexMap, station_name: str) -> list[RailwayRef]:
    """Look a station name up in a built index.

    Matching stages, first hit wins:
    1. exact name;
    2. name with a trailing "駅"/"Station" removed;
    3. prefix match in either direction. Among several candidates the key
       closest in length wins, ties broken lexicographically, so the result
       does not depend on the order the index was built in.

    Returns an empty list when nothing matches.
    """
    name = station_name.strip()
    if name in index:
        return list(index[name])

    normalized = strip_station_suffix(name)
    if normalized in index:
        return list(index[normalized])

    if not normalized:
        return []

    candidates = [
        key for key in index if key.startswith(normalized) or normalized.startswith(key)
    ]
    if not candidates:
        return []

    best = min(candidates, key=lambda key: (abs(len(key) - len(normalized)), key))
    logger.debug(f"Prefix match for '{station_name}': '{best}'")
    return list(index[best])


class RailwayIndex:
    """Cached reverse-index from station names to railways."""

    def __init__(
        self,
        catalog: RailwayCatalog,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the index.

        Args:
            catalog: Source of the bulk railway line dump.
            ttl_seconds: How long a built index stays valid.
            clock: Monotonic clock in seconds, injectable for tests.
        """
        self._catalog = catalog
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._index: RailwayIndexMap | None = None
        self._built_at: float | None = None
        self._build_task: asyncio.Task[RailwayIndexMap] | None = None
        self.build_count = 0

    @property
    def is_fresh(self) -> bool:
        """Whether a built index exists and has not yet expired."""
        if self._index is None or self._built_at is None:
            return False
        return self._clock() - self._built_at < self._ttl_seconds

    @property
    def station_count(self) -> int:
        """Number of station names in the current index (0 when not built)."""
        return len(self._index) if self._index is not None else 0

    async def get_or_rebuild(self) -> RailwayIndexMap:
        """Return the current index, rebuilding it first if absent or expired."""
        if self.is_fresh and self._index is not None:
            return self._index

        # Expired indexes are never served, not even while the rebuild runs
        self._index = None
        self._built_at = None

        if self._build_task is None:
            self._build_task = asyncio.create_task(self._build())
        else:
            logger.debug("Railway index build already in flight, waiting for it")

        return await asyncio.shield(self._build_task)

    async def refresh(self) -> RailwayIndexMap:
        """Discard the current index and rebuild it."""
        self._index = None
        self._built_at = None
        return await self.get_or_rebuild()

    async def lookup(self, station_name: str) -> list[RailwayRef]:
        """Resolve a single station name."""
        index = await self.get_or_rebuild()
        return lookup_railways(index, station_name)

    async def resolve_railways(self, station_names: list[str]) -> dict[str, list[RailwayRef]]:
        """Resolve several station names against one consistent index.

        Args:
            station_names: Station display names to resolve.

        Returns:
            Mapping from every requested name to its railways (empty list when unknown).
        """
        index = await self.get_or_rebuild()
        return {name: lookup_railways(index, name) for name in station_names}

    async def _build(self) -> RailwayIndexMap:
        """Fetch the catalog and build a new index."""
        try:
            logger.info("Building railway index...")
            railways = await self._catalog.fetch_all_railways()
            index = build_index(railways)
            self._index = index
            self._built_at = self._clock()
            self.build_count += 1
            logger.info(
                f"Railway index built from {len(railways)} railways: {len(index)} stations"
            )
            return index
        except Exception as e:
            logger.error(f"Failed to build railway index: {e}")
            raise
        finally:
            self._build_task = None
