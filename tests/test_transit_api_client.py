"""Tests for the transit JSON API client."""

from typing import Any

import pytest

from synca_transit.adapters.transit_api import TransitApiClient
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import Coordinates, RailwayRef, StatusKind

BASE_URL = "http://transit.example/"
OMIYA = Coordinates(latitude=35.9064, longitude=139.6237)


@pytest.mark.asyncio
async def test_find_stations(fake_session: Any) -> None:
    """Given a nearby-stations envelope, when finding stations, then raw stations are returned."""
    fake_session.respond(
        json_body={
            "success": True,
            "data": [{"id": 123, "name": "大宮", "lat": 35.906, "lng": 139.624}],
            "count": 1,
        }
    )
    client = TransitApiClient(fake_session, BASE_URL)

    stations = await client.find_stations(OMIYA, 2000)

    method, url, kwargs = fake_session.requests[0]
    assert (method, url) == ("GET", "http://transit.example/api/transit/nearby-stations")
    assert kwargs["params"] == {"lat": "35.9064", "lng": "139.6237", "radius": "2000"}
    assert stations[0].id == "123"
    assert stations[0].coordinates == Coordinates(latitude=35.906, longitude=139.624)


@pytest.mark.asyncio
async def test_resolve_railways_fills_missing_names(fake_session: Any) -> None:
    """Given railways for one of two names, when resolving, then the other maps to []."""
    fake_session.respond(
        json_body={
            "success": True,
            "data": [
                {
                    "stationName": "大宮",
                    "railways": [
                        {
                            "railwayId": "odpt.Railway:JR-East.Takasaki",
                            "railwayName": "高崎線",
                            "operator": "odpt.Operator:JR-East",
                        }
                    ],
                }
            ],
        }
    )
    client = TransitApiClient(fake_session, BASE_URL)

    resolved = await client.resolve_railways(["大宮", "北大宮"])

    assert fake_session.requests[0][2]["params"] == {"names": "大宮,北大宮"}
    assert resolved == {
        "大宮": [
            RailwayRef("odpt.Railway:JR-East.Takasaki", "高崎線", "odpt.Operator:JR-East")
        ],
        "北大宮": [],
    }


@pytest.mark.asyncio
async def test_resolve_no_names_skips_request(fake_session: Any) -> None:
    """Given no names, when resolving, then no request is made."""
    client = TransitApiClient(fake_session, BASE_URL)

    assert await client.resolve_railways([]) == {}
    assert fake_session.requests == []


@pytest.mark.asyncio
async def test_fetch_all_statuses(fake_session: Any) -> None:
    """Given a train-info envelope, when fetching, then statuses are returned."""
    fake_session.respond(
        json_body={
            "success": True,
            "updatedAt": "2026-04-01T08:30:00+00:00",
            "data": [
                {
                    "railwayId": "jreast.Takasaki",
                    "railwayName": "高崎線",
                    "operator": "JR東日本",
                    "status": "delay",
                    "statusText": "遅延",
                }
            ],
        }
    )
    client = TransitApiClient(fake_session, BASE_URL)

    statuses = await client.fetch_all_statuses()

    assert statuses[0].status is StatusKind.DELAY
    assert statuses[0].cause is None


@pytest.mark.asyncio
async def test_unsuccessful_envelope_raises(fake_session: Any) -> None:
    """Given success false, when fetching, then UpstreamError carries the server message."""
    fake_session.respond(status=500, json_body={"success": False, "error": "boom"})
    client = TransitApiClient(fake_session, BASE_URL)

    with pytest.raises(UpstreamError, match="boom") as exc_info:
        await client.fetch_all_statuses()

    assert exc_info.value.details.status_code == 500


@pytest.mark.asyncio
async def test_malformed_body_raises(fake_session: Any) -> None:
    """Given a body that is not an envelope, when fetching, then UpstreamError is raised."""
    fake_session.respond(json_body=["not", "an", "envelope"])
    client = TransitApiClient(fake_session, BASE_URL)

    with pytest.raises(UpstreamError):
        await client.fetch_all_statuses()


@pytest.mark.asyncio
async def test_resolve_skips_names_containing_commas(fake_session: Any) -> None:
    """Given a name with a comma, when resolving, then it is not sent and maps to []."""
    fake_session.respond(json_body={"success": True, "data": []})
    client = TransitApiClient(fake_session, BASE_URL)

    resolved = await client.resolve_railways(["大宮", "Foo, Bar"])

    assert fake_session.requests[0][2]["params"] == {"names": "大宮"}
    assert resolved == {"大宮": [], "Foo, Bar": []}


@pytest.mark.asyncio
async def test_resolve_only_comma_names_skips_request(fake_session: Any) -> None:
    """Given only names with commas, when resolving, then no request is made."""
    client = TransitApiClient(fake_session, BASE_URL)

    assert await client.resolve_railways(["Foo, Bar"]) == {"Foo, Bar": []}
    assert fake_session.requests == []


@pytest.mark.asyncio
async def test_malformed_item_raises_upstream_error(fake_session: Any) -> None:
    """Given one status item missing fields, when fetching, then UpstreamError is raised."""
    fake_session.respond(
        json_body={"success": True, "data": [{"railwayId": "jreast.Takasaki"}]}
    )
    client = TransitApiClient(fake_session, BASE_URL)

    with pytest.raises(UpstreamError, match="Malformed item"):
        await client.fetch_all_statuses()


@pytest.mark.asyncio
async def test_non_list_data_raises_upstream_error(fake_session: Any) -> None:
    """Given data that is not a list, when finding stations, then UpstreamError is raised."""
    fake_session.respond(json_body={"success": True, "data": 42})
    client = TransitApiClient(fake_session, BASE_URL)

    with pytest.raises(UpstreamError, match="Malformed item"):
        await client.find_stations(OMIYA, 2000)
