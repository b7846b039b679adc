"""Behavior tests for the transit HTTP API."""

from collections.abc import Iterator

import pytest
from starlette.testclient import TestClient

from synca_transit.adapters.config import AppConfig
from synca_transit.adapters.web import TransitServices, create_app
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import (
    AlertResult,
    Coordinates,
    RailwayRef,
    RailwayStatus,
    RawStation,
    StatusKind,
)

OMIYA_STATION = RawStation(
    id="1", name="大宮", coordinates=Coordinates(latitude=35.9064, longitude=139.6237)
)
TAKASAKI_REF = RailwayRef("odpt.Railway:JR-East.Takasaki", "高崎線", "JR東日本")
TAKASAKI_DELAY = RailwayStatus(
    railway_id="jreast.Takasaki",
    railway_name="高崎線",
    operator="JR東日本",
    status=StatusKind.DELAY,
    status_text="遅延",
    cause="強風",
)


class FakeStationLocator:
    def __init__(self) -> None:
        self.error: Exception | None = None
        self.radius: int | None = None

    async def find_stations(self, location: Coordinates, radius_meters: int) -> list[RawStation]:
        self.radius = radius_meters
        if self.error is not None:
            raise self.error
        return [OMIYA_STATION]


class FakeResolver:
    def __init__(self) -> None:
        self.error: Exception | None = None

    async def resolve_railways(self, station_names: list[str]) -> dict[str, list[RailwayRef]]:
        if self.error is not None:
            raise self.error
        return {name: [TAKASAKI_REF] if name == "大宮" else [] for name in station_names}


class FakeTrainInfo:
    async def fetch_all_statuses(self) -> list[RailwayStatus]:
        return [TAKASAKI_DELAY]

    async def statuses_for(self, railway_ids: list[str]) -> dict[str, dict[str, str | None]]:
        return {railway_id: {"status": "normal", "statusText": "ok"} for railway_id in railway_ids}


class FakeAlertService:
    def __init__(self) -> None:
        self.calls = 0

    async def check(self) -> AlertResult:
        self.calls += 1
        return AlertResult(disrupted_lines=["高崎線"], notified_lines=["高崎線"], sent=True)


@pytest.fixture
def services() -> TransitServices:
    return TransitServices(
        station_locator=FakeStationLocator(),
        railway_resolver=FakeResolver(),
        train_info=FakeTrainInfo(),  # type: ignore[arg-type]
        alert_service=FakeAlertService(),  # type: ignore[arg-type]
    )


def _client(services: TransitServices, **config_overrides: object) -> TestClient:
    config = AppConfig.for_testing(**config_overrides)
    return TestClient(create_app(config, services=services, start_pollers=False))


@pytest.fixture
def client(services: TransitServices) -> Iterator[TestClient]:
    with _client(services) as test_client:
        yield test_client


class TestNearbyStations:
    def test_returns_stations_with_count(self, client: TestClient, services: TransitServices) -> None:
        """Given coordinates, when requesting nearby stations, then they are returned with a count."""
        response = client.get("/api/transit/nearby-stations", params={"lat": "35.9", "lng": "139.6"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 1
        assert body["data"][0] == {"id": "1", "name": "大宮", "lat": 35.9064, "lng": 139.6237}
        assert services.station_locator.radius == 3000  # type: ignore[attr-defined]

    def test_radius_parameter_is_used(self, client: TestClient, services: TransitServices) -> None:
        """Given a radius, when requesting, then it is passed to the locator."""
        client.get(
            "/api/transit/nearby-stations", params={"lat": "35.9", "lng": "139.6", "radius": "500"}
        )

        assert services.station_locator.radius == 500  # type: ignore[attr-defined]

    @pytest.mark.parametrize("params", [{}, {"lat": "35.9"}, {"lat": "abc", "lng": "139.6"}])
    def test_bad_coordinates_are_rejected(self, client: TestClient, params: dict[str, str]) -> None:
        """Given missing or malformed coordinates, when requesting, then 400 is returned."""
        response = client.get("/api/transit/nearby-stations", params=params)

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_upstream_failure_is_500(self, client: TestClient, services: TransitServices) -> None:
        """Given a failing locator, when requesting, then 500 is returned."""
        services.station_locator.error = UpstreamError("overpass down")  # type: ignore[attr-defined]

        response = client.get("/api/transit/nearby-stations", params={"lat": "35.9", "lng": "139.6"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to fetch nearby stations"}


class TestStationRailways:
    def test_resolves_each_name(self, client: TestClient) -> None:
        """Given two names, when requesting, then each name lists its railways."""
        response = client.get("/api/transit/station-railways", params={"names": "大宮, 北大宮"})

        assert response.status_code == 200
        assert response.json()["data"] == [
            {
                "stationName": "大宮",
                "railways": [
                    {
                        "railwayId": "odpt.Railway:JR-East.Takasaki",
                        "railwayName": "高崎線",
                        "operator": "JR東日本",
                    }
                ],
            },
            {"stationName": "北大宮", "railways": []},
        ]

    def test_missing_names_is_400(self, client: TestClient) -> None:
        """Given no names, when requesting, then 400 is returned."""
        assert client.get("/api/transit/station-railways").status_code == 400

    def test_index_failure_is_500(self, client: TestClient, services: TransitServices) -> None:
        """Given a failing index build, when requesting, then 500 is returned."""
        services.railway_resolver.error = RuntimeError("catalog down")  # type: ignore[attr-defined]

        response = client.get("/api/transit/station-railways", params={"names": "大宮"})

        assert response.status_code == 500


class TestTrainInfo:
    def test_lists_statuses_with_timestamp(self, client: TestClient) -> None:
        """Given known railways, when requesting train info, then statuses and updatedAt return."""
        body = client.get("/api/transit/train-info").json()

        assert body["success"] is True
        assert "updatedAt" in body
        assert body["data"] == [
            {
                "railwayId": "jreast.Takasaki",
                "railwayName": "高崎線",
                "operator": "JR東日本",
                "status": "delay",
                "statusText": "遅延",
                "cause": "強風",
            }
        ]

    def test_nearby_status_keys_by_railway_id(self, client: TestClient) -> None:
        """Given railway ids, when requesting nearby status, then entries are keyed by id."""
        body = client.get("/api/transit/nearby-status", params={"railways": "a.X,b.Y"}).json()

        assert set(body["data"]) == {"a.X", "b.Y"}

    def test_nearby_status_without_ids_is_400(self, client: TestClient) -> None:
        """Given no railway ids, when requesting nearby status, then 400 is returned."""
        assert client.get("/api/transit/nearby-status").status_code == 400


class TestNearby:
    def test_aggregates_stations_with_statuses(self, client: TestClient) -> None:
        """Given coordinates, when requesting nearby, then ranked stations carry statuses."""
        response = client.get("/api/transit/nearby", params={"lat": "35.9064", "lng": "139.6237"})

        assert response.status_code == 200
        entry = response.json()["data"][0]
        assert entry["station"]["name"] == "大宮"
        assert entry["station"]["distance"] == pytest.approx(0.0)
        assert entry["railwayStatuses"][0]["railwayId"] == "jreast.Takasaki"

    def test_station_failure_is_500(self, client: TestClient, services: TransitServices) -> None:
        """Given a failing locator, when requesting nearby, then 500 is returned."""
        services.station_locator.error = UpstreamError("overpass down")  # type: ignore[attr-defined]

        response = client.get("/api/transit/nearby", params={"lat": "35.9", "lng": "139.6"})

        assert response.status_code == 500

    def test_out_of_range_coordinates_are_400(self, client: TestClient) -> None:
        """Given a latitude beyond 90, when requesting nearby, then 400 is returned."""
        response = client.get("/api/transit/nearby", params={"lat": "95", "lng": "139.6"})

        assert response.status_code == 400


class TestCronTrainDelay:
    def test_runs_check_without_secret(self, client: TestClient, services: TransitServices) -> None:
        """Given no secret configured, when triggering, then the check runs."""
        response = client.post("/api/cron/train-delay")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "disruptedLines": ["高崎線"],
            "notifiedLines": ["高崎線"],
            "sent": True,
        }
        assert services.alert_service.calls == 1  # type: ignore[union-attr]

    def test_secret_is_enforced(self, services: TransitServices) -> None:
        """Given a secret, when triggering without or with the token, then 401 or 200 results."""
        with _client(services, cron_secret="s3cret") as client:
            assert client.get("/api/cron/train-delay").status_code == 401
            assert (
                client.get(
                    "/api/cron/train-delay", headers={"Authorization": "Bearer wrong"}
                ).status_code
                == 401
            )
            response = client.get(
                "/api/cron/train-delay", headers={"Authorization": "Bearer s3cret"}
            )

        assert response.status_code == 200

    def test_unconfigured_alerts_are_503(self, services: TransitServices) -> None:
        """Given no alert service, when triggering, then 503 is returned."""
        services.alert_service = None

        with _client(services) as client:
            assert client.post("/api/cron/train-delay").status_code == 503


def test_rate_limit_returns_429(services: TransitServices) -> None:
    """Given a limit of two requests per minute, when sending three, then the third gets 429."""
    with _client(services, rate_limit_per_minute=2) as client:
        statuses = [client.get("/healthz").status_code for _ in range(3)]

    assert statuses[:2] == [200, 200]
    assert statuses[2] == 429


def test_healthz(client: TestClient) -> None:
    """Given a running app, when checking health, then Ok is returned."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.text == "Ok"
