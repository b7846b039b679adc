"""Wire schemas of the transit JSON API.

All responses share the envelope {success, data, error}; keys are camelCase.
"""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from synca_transit.domain.models import (
    Coordinates,
    NearbyStation,
    RailwayRef,
    RailwayStatus,
    RawStation,
    StationWithStatus,
    StatusKind,
)

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serializing to camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiEnvelope(CamelModel, Generic[T]):
    """Uniform response envelope."""

    success: bool
    data: T | None = None
    error: str | None = None
    count: int | None = None
    updated_at: datetime | None = None


class StationPayload(CamelModel):
    """A station found around a position."""

    id: str
    name: str
    lat: float
    lng: float
    operator: str | None = None
    network: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        """OpenStreetMap ids are numbers; keep them as strings."""
        return str(v)

    @classmethod
    def from_domain(cls, station: RawStation) -> "StationPayload":
        return cls(
            id=station.id,
            name=station.name,
            lat=station.coordinates.latitude,
            lng=station.coordinates.longitude,
            operator=station.operator,
            network=station.network,
        )

    def to_domain(self) -> RawStation:
        return RawStation(
            id=self.id,
            name=self.name,
            coordinates=Coordinates(latitude=self.lat, longitude=self.lng),
            operator=self.operator,
            network=self.network,
        )


class RailwayRefPayload(CamelModel):
    """A railway serving a station."""

    railway_id: str
    railway_name: str
    operator: str = ""

    @classmethod
    def from_domain(cls, ref: RailwayRef) -> "RailwayRefPayload":
        return cls(railway_id=ref.railway_id, railway_name=ref.railway_name, operator=ref.operator)

    def to_domain(self) -> RailwayRef:
        return RailwayRef(
            railway_id=self.railway_id, railway_name=self.railway_name, operator=self.operator
        )


class StationRailwaysPayload(CamelModel):
    """The railways resolved for one station name."""

    station_name: str
    railways: list[RailwayRefPayload] = []


class RailwayStatusPayload(CamelModel):
    """Operational status of one railway."""

    railway_id: str
    railway_name: str
    operator: str
    status: StatusKind
    status_text: str
    cause: str | None = None

    @classmethod
    def from_domain(cls, status: RailwayStatus) -> "RailwayStatusPayload":
        return cls(
            railway_id=status.railway_id,
            railway_name=status.railway_name,
            operator=status.operator,
            status=status.status,
            status_text=status.status_text,
            cause=status.cause,
        )

    def to_domain(self) -> RailwayStatus:
        return RailwayStatus(
            railway_id=self.railway_id,
            railway_name=self.railway_name,
            operator=self.operator,
            status=self.status,
            status_text=self.status_text,
            cause=self.cause,
        )


class NearbyStationPayload(CamelModel):
    """A ranked station with its distance in meters."""

    id: str
    name: str
    lat: float
    lng: float
    distance: float

    @classmethod
    def from_domain(cls, station: NearbyStation) -> "NearbyStationPayload":
        return cls(
            id=station.id,
            name=station.name,
            lat=station.coordinates.latitude,
            lng=station.coordinates.longitude,
            distance=station.distance_meters,
        )


class StationWithStatusPayload(CamelModel):
    """A ranked station with the statuses of its railways."""

    station: NearbyStationPayload
    railway_statuses: list[RailwayStatusPayload] = []

    @classmethod
    def from_domain(cls, entry: StationWithStatus) -> "StationWithStatusPayload":
        return cls(
            station=NearbyStationPayload.from_domain(entry.station),
            railway_statuses=[RailwayStatusPayload.from_domain(s) for s in entry.railway_statuses],
        )
