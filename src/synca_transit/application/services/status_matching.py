"""Matching railway statuses to the railways resolved for a station.

Railway ids come from two independent upstream schemes (the railway catalog
and the status sources), so ids are compared loosely: equal ids match, and so
do ids where the last dot-delimited segment of one appears in the other.
"""

from synca_transit.domain.models import NearbyStation, RailwayStatus, StationWithStatus


def last_segment(railway_id: str) -> str:
    """Return the part after the last dot, e.g. "Takasaki" for "odpt.Railway:JR-East.Takasaki"."""
    return railway_id.rsplit(".", 1)[-1]


def railway_ids_match(resolved_id: str, status_id: str) -> bool:
    """Whether a resolved railway id and a status railway id denote the same line."""
    if not resolved_id or not status_id:
        return False
    if resolved_id == status_id:
        return True

    resolved_tail = last_segment(resolved_id)
    status_tail = last_segment(status_id)
    return bool(resolved_tail and resolved_tail in status_id) or bool(
        status_tail and status_tail in resolved_id
    )


def statuses_for_railways(
    railway_ids: list[str], statuses: list[RailwayStatus]
) -> list[RailwayStatus]:
    """Pick the statuses matching any of the given railway ids, in status order."""
    if not railway_ids:
        return []
    return [
        status
        for status in statuses
        if any(railway_ids_match(railway_id, status.railway_id) for railway_id in railway_ids)
    ]


def attach_statuses(
    stations: list[NearbyStation],
    station_railway_ids: dict[str, list[str]],
    statuses: list[RailwayStatus],
) -> list[StationWithStatus]:
    """Join every station with the statuses of its resolved railways.

    Stations with no resolved railways get an empty status list.
    """
    return [
        StationWithStatus(
            station=station,
            railway_statuses=statuses_for_railways(
                station_railway_ids.get(station.id, []), statuses
            ),
        )
        for station in stations
    ]
