"""Command line view of the stations around a position and their railway status."""

import argparse
import asyncio
import json
import sys
from typing import Any

import aiohttp

from synca_transit.adapters.config import AppConfig
from synca_transit.adapters.geolocation import StaticGeolocator
from synca_transit.adapters.transit_api import TransitApiClient
from synca_transit.adapters.transit_api.schemas import StationWithStatusPayload
from synca_transit.adapters.web.services import build_services
from synca_transit.application.services import NearbyAggregator, format_distance
from synca_transit.domain.models import Coordinates, NearbySnapshot, StatusKind

STATUS_MARKERS = {
    StatusKind.NORMAL: "  ",
    StatusKind.DELAY: "! ",
    StatusKind.SUSPEND: "x ",
    StatusKind.DIRECT: "~ ",
    StatusKind.RESTORE: "+ ",
}


def render_snapshot(snapshot: NearbySnapshot) -> str:
    """Human readable listing of a snapshot."""
    if snapshot.location_error:
        return f"Location error: {snapshot.location_error}"
    if snapshot.station_error:
        return f"Error: {snapshot.station_error}"
    if not snapshot.stations:
        return "No stations nearby."

    lines = []
    for entry in snapshot.stations:
        station = entry.station
        lines.append(f"{station.name} ({format_distance(station.distance_meters)})")
        if not entry.railway_statuses:
            lines.append("    no line information")
        for status in entry.railway_statuses:
            marker = STATUS_MARKERS.get(status.status, "  ")
            lines.append(f"  {marker}{status.railway_name}: {status.status_text}")
    if snapshot.last_updated is not None:
        lines.append(f"Updated {snapshot.last_updated.astimezone():%H:%M:%S}")
    return "\n".join(lines)


def snapshot_to_json(snapshot: NearbySnapshot) -> list[dict[str, Any]]:
    return [
        StationWithStatusPayload.from_domain(entry).model_dump(by_alias=True, mode="json")
        for entry in snapshot.stations
    ]


async def _print_snapshot(snapshot: NearbySnapshot, as_json: bool) -> None:
    if as_json:
        print(json.dumps(snapshot_to_json(snapshot), indent=2, ensure_ascii=False))
    else:
        print(render_snapshot(snapshot))
        print()


async def run_nearby(args: argparse.Namespace) -> int:
    """Run the aggregation once, or keep polling with --watch."""
    config = AppConfig()
    config.load_toml()
    if args.radius is not None:
        config.search_radius_meters = args.radius
    settings = config.aggregator_settings()

    geolocator = StaticGeolocator(Coordinates(latitude=args.lat, longitude=args.lng))

    async with aiohttp.ClientSession() as session:
        if args.api_base_url:
            client = TransitApiClient(session, args.api_base_url)
            station_locator, railway_resolver, status_fetcher = client, client, client
        else:
            services = build_services(config, session)
            station_locator = services.station_locator
            railway_resolver = services.railway_resolver
            status_fetcher = services.train_info

        async def on_update(snapshot: NearbySnapshot) -> None:
            if args.watch:
                await _print_snapshot(snapshot, args.json)

        async with NearbyAggregator(
            geolocator=geolocator,
            station_locator=station_locator,
            railway_resolver=railway_resolver,
            status_fetcher=status_fetcher,
            settings=settings,
            on_update=on_update,
        ) as aggregator:
            snapshot = await aggregator.start()
            if not args.watch:
                await _print_snapshot(snapshot, args.json)
            else:
                while aggregator.is_polling:
                    await asyncio.sleep(1)

    if snapshot.location_error or snapshot.station_error:
        return 1
    return 0


async def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Nearby stations and railway status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Stations around Omiya, querying upstream services directly
  synca-nearby --lat 35.9064 --lng 139.6237

  # The same through a deployed server, refreshing statuses every 3 minutes
  synca-nearby --lat 35.9064 --lng 139.6237 --api-base-url http://localhost:8000 --watch
        """,
    )
    parser.add_argument("--lat", type=float, required=True, help="Latitude")
    parser.add_argument("--lng", type=float, required=True, help="Longitude")
    parser.add_argument("--radius", type=int, default=None, help="Search radius in meters")
    parser.add_argument(
        "--api-base-url", default=None, help="Use a running transit API instead of upstreams"
    )
    parser.add_argument("--watch", action="store_true", help="Keep polling railway statuses")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    args = parser.parse_args()

    try:
        exit_code = await run_nearby(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
