"""Raw train information reported by a status source."""

from dataclasses import dataclass

from synca_transit.domain.models.railway_status import StatusKind


@dataclass(frozen=True)
class TrainInformation:
    """A status report for one railway, before it is merged into the known line set."""

    railway_id: str
    status: StatusKind
    text: str | None = None
    cause: str | None = None
