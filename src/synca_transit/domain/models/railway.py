"""Railway line domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RailwayRef:
    """Reference to a railway line serving a station."""

    railway_id: str
    railway_name: str
    operator: str = ""


@dataclass(frozen=True)
class RailwayLine:
    """A railway line with its ordered station names, as published upstream."""

    railway_id: str
    railway_name: str
    operator: str
    station_names: list[str] = field(default_factory=list)
