"""Nearby station aggregation: locate, discover, resolve railways, attach statuses.

A NearbyAggregator drives one session (one screen, one CLI run). It runs the
chain locate -> discover stations -> resolve railways -> attach statuses and
then re-polls statuses on an interval without repeating the earlier steps.
"""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from synca_transit.application.services.distance import distance_meters
from synca_transit.application.services.status_matching import attach_statuses
from synca_transit.domain.exceptions import GeolocationError, GeolocationErrorKind
from synca_transit.domain.models import (
    Coordinates,
    NearbySnapshot,
    NearbyStation,
    RawStation,
    StationWithStatus,
)

if TYPE_CHECKING:
    from synca_transit.domain.ports import (
        Geolocator,
        RailwayResolver,
        StationLocator,
        StatusFetcher,
    )

logger = logging.getLogger(__name__)

STATION_LOOKUP_ERROR_MESSAGE = "Failed to fetch nearby stations"

UpdateListener = Callable[[NearbySnapshot], Awaitable[None]]


@dataclass(frozen=True)
class AggregatorSettings:
    """Tunables for a nearby aggregation session."""

    radius_meters: int = 3000
    max_stations: int = 3
    status_refresh_interval_seconds: float = 180.0
    geolocation_timeout_seconds: float = 10.0
    railway_table_size: int = 64


def _utc_now() -> datetime:
    return datetime.now(UTC)


def rank_stations(
    location: Coordinates, stations: list[RawStation], limit: int
) -> list[NearbyStation]:
    """Compute distances from location, sort ascending and keep the closest `limit`."""
    ranked = sorted(
        (
            NearbyStation(
                id=station.id,
                name=station.name,
                coordinates=station.coordinates,
                distance_meters=distance_meters(location, station.coordinates),
            )
            for station in stations
        ),
        key=lambda station: station.distance_meters,
    )
    return ranked[:limit]


class StationRailwayTable:
    """Bounded LRU mapping from station id to resolved railway ids."""

    def __init__(self, capacity: int) -> None:
        self._capacity = max(1, capacity)
        self._entries: OrderedDict[str, list[str]] = OrderedDict()

    def get(self, station_id: str) -> list[str]:
        railway_ids = self._entries.get(station_id)
        if railway_ids is None:
            return []
        self._entries.move_to_end(station_id)
        return list(railway_ids)

    def set(self, station_id: str, railway_ids: list[str]) -> None:
        self._entries[station_id] = list(railway_ids)
        self._entries.move_to_end(station_id)
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)

    def as_dict(self) -> dict[str, list[str]]:
        return {station_id: list(ids) for station_id, ids in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)


class NearbyAggregator:
    """Builds and keeps fresh a ranked, status-annotated list of nearby stations."""

    def __init__(
        self,
        geolocator: Geolocator,
        station_locator: StationLocator,
        railway_resolver: RailwayResolver,
        status_fetcher: StatusFetcher,
        settings: AggregatorSettings | None = None,
        clock: Callable[[], datetime] = _utc_now,
        on_update: UpdateListener | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            geolocator: Source of the current device position.
            station_locator: Finds stations around a position.
            railway_resolver: Resolves station names to railways.
            status_fetcher: Returns the status of all known railway lines.
            settings: Radius, station cap, polling interval and timeouts.
            clock: Returns the current time for "last updated" stamps.
            on_update: Optional coroutine called with each published snapshot.
        """
        self._geolocator = geolocator
        self._station_locator = station_locator
        self._railway_resolver = railway_resolver
        self._status_fetcher = status_fetcher
        self.settings = settings or AggregatorSettings()
        self._clock = clock
        self._on_update = on_update
        self._snapshot = NearbySnapshot()
        self._generation = 0
        self._railway_ids = StationRailwayTable(self.settings.railway_table_size)
        self._poll_task: asyncio.Task | None = None
        self._status_fetches = 0

    @property
    def snapshot(self) -> NearbySnapshot:
        """The latest published state."""
        return self._snapshot

    @property
    def is_polling(self) -> bool:
        """Whether a status polling task is scheduled."""
        return self._poll_task is not None and not self._poll_task.done()

    @property
    def station_railway_ids(self) -> dict[str, list[str]]:
        """Copy of the station id to railway ids table for this session."""
        return self._railway_ids.as_dict()

    async def __aenter__(self) -> NearbyAggregator:
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        await self.aclose()

    async def start(self) -> NearbySnapshot:
        """Run the initial locate chain."""
        return await self.refresh_location()

    async def stop(self) -> None:
        """Cancel status polling and wait for it to finish."""
        task = self._poll_task
        self._poll_task = None
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.debug("Status polling cancelled")

    async def aclose(self) -> None:
        await self.stop()

    async def refresh_location(self) -> NearbySnapshot:
        """Re-run the whole chain starting from geolocation.

        Results of an earlier, still running chain are discarded once this
        call has started.
        """
        self._generation += 1
        generation = self._generation
        self._update(generation=generation, is_loading_location=True, location_error=None)

        try:
            location = await asyncio.wait_for(
                self._geolocator.locate(), timeout=self.settings.geolocation_timeout_seconds
            )
        except TimeoutError:
            await self._fail_location(generation, GeolocationError(GeolocationErrorKind.TIMEOUT))
            return self._snapshot
        except GeolocationError as e:
            await self._fail_location(generation, e)
            return self._snapshot
        except Exception as e:
            logger.error(f"Unexpected geolocation failure: {e}")
            await self._fail_location(
                generation, GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE)
            )
            return self._snapshot

        if self._is_stale(generation):
            logger.debug(f"Discarding location from stale generation {generation}")
            return self._snapshot

        self._update(current_location=location, is_loading_location=False)
        await self._discover_stations(location, generation)
        return self._snapshot

    async def refresh_status(self) -> NearbySnapshot:
        """Re-fetch statuses for the current stations; no-op without stations."""
        if not self._snapshot.stations:
            return self._snapshot

        generation = self._generation
        stations = [entry.station for entry in self._snapshot.stations]
        result = await self._fetch_statuses(stations, generation)
        if result is None:
            return self._snapshot

        self._update(stations=result)
        await self._publish()
        return self._snapshot

    async def _fail_location(self, generation: int, error: GeolocationError) -> None:
        if self._is_stale(generation):
            return
        logger.warning(f"Geolocation failed: {error.kind}")
        self._update(
            is_loading_location=False,
            is_loading_stations=False,
            location_error=error.user_message,
        )
        await self._publish()

    async def _discover_stations(self, location: Coordinates, generation: int) -> None:
        self._update(is_loading_stations=True, station_error=None)

        try:
            raw_stations = await self._station_locator.find_stations(
                location, self.settings.radius_meters
            )
        except Exception as e:
            if self._is_stale(generation):
                return
            logger.error(f"Station lookup failed: {e}")
            self._cancel_polling()
            self._update(
                stations=[], is_loading_stations=False, station_error=STATION_LOOKUP_ERROR_MESSAGE
            )
            await self._publish()
            return

        if self._is_stale(generation):
            logger.debug(f"Discarding stations from stale generation {generation}")
            return

        logger.info(f"Found {len(raw_stations)} stations within {self.settings.radius_meters}m")
        ranked = rank_stations(location, raw_stations, self.settings.max_stations)

        if not ranked:
            self._cancel_polling()
            self._update(stations=[], is_loading_stations=False, last_updated=self._clock())
            await self._publish()
            return

        logger.info(
            "Closest stations: "
            + ", ".join(f"{s.name}({round(s.distance_meters)}m)" for s in ranked)
        )

        await self._resolve_railways(ranked, generation)
        if self._is_stale(generation):
            return

        result = await self._fetch_statuses(ranked, generation)
        if result is None:
            return

        self._update(stations=result, is_loading_stations=False)
        self._schedule_polling()
        await self._publish()

    async def _resolve_railways(self, stations: list[NearbyStation], generation: int) -> None:
        names = list(dict.fromkeys(station.name for station in stations))
        try:
            resolved = await self._railway_resolver.resolve_railways(names)
        except Exception as e:
            logger.warning(f"Failed to resolve railways for {', '.join(names)}: {e}")
            return

        if self._is_stale(generation):
            return

        for station in stations:
            refs = resolved.get(station.name, [])
            self._railway_ids.set(station.id, [ref.railway_id for ref in refs])
            if refs:
                logger.debug(
                    f"Railways at {station.name}: {', '.join(r.railway_name for r in refs)}"
                )

    async def _fetch_statuses(
        self, stations: list[NearbyStation], generation: int
    ) -> list[StationWithStatus] | None:
        """Attach statuses to stations; None when the result belongs to a stale generation."""
        self._status_fetches += 1
        self._update(is_loading_status=True)

        try:
            statuses = await self._status_fetcher.fetch_all_statuses()
        except Exception as e:
            logger.warning(f"Status fetch failed, showing stations without status: {e}")
            statuses = None
        finally:
            self._status_fetches -= 1
            self._update(is_loading_status=self._status_fetches > 0)

        if self._is_stale(generation):
            logger.debug(f"Discarding statuses from stale generation {generation}")
            return None

        if statuses is None:
            result = [StationWithStatus(station=station) for station in stations]
        else:
            table = {station.id: self._railway_ids.get(station.id) for station in stations}
            result = attach_statuses(stations, table, statuses)

        self._update(last_updated=self._clock())
        return result

    def _schedule_polling(self) -> None:
        self._cancel_polling()
        self._poll_task = asyncio.create_task(self._poll_loop())
        logger.debug(
            f"Scheduled status polling every {self.settings.status_refresh_interval_seconds}s"
        )

    def _cancel_polling(self) -> None:
        if self._poll_task and not self._poll_task.done():
            self._poll_task.cancel()
        self._poll_task = None

    async def _poll_loop(self) -> None:
        # Lives until the station list is replaced or emptied, or stop() is called
        try:
            while True:
                await asyncio.sleep(self.settings.status_refresh_interval_seconds)
                try:
                    await self.refresh_status()
                except Exception as e:
                    logger.error(f"Status polling iteration failed: {e}")
        except asyncio.CancelledError:
            logger.debug("Status polling loop cancelled")
            raise

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _update(self, **changes: Any) -> None:
        self._snapshot = replace(self._snapshot, **changes)

    async def _publish(self) -> None:
        if self._on_update is not None:
            await self._on_update(self._snapshot)
