"""Railway operational status domain model."""

from dataclasses import dataclass
from enum import StrEnum


class StatusKind(StrEnum):
    """Operational state of a railway line."""

    NORMAL = "normal"
    DELAY = "delay"
    SUSPEND = "suspend"
    DIRECT = "direct"
    RESTORE = "restore"


NORMAL_STATUS_TEXT = "operating normally"

DEFAULT_STATUS_TEXTS: dict[StatusKind, str] = {
    StatusKind.NORMAL: NORMAL_STATUS_TEXT,
    StatusKind.DELAY: "delays are occurring",
    StatusKind.SUSPEND: "service is suspended",
    StatusKind.DIRECT: "through service is cancelled",
    StatusKind.RESTORE: "service has resumed",
}


@dataclass(frozen=True)
class RailwayStatus:
    """Current status of a single railway line."""

    railway_id: str
    railway_name: str
    operator: str
    status: StatusKind
    status_text: str
    cause: str | None = None

    @property
    def is_disrupted(self) -> bool:
        """Whether the line is running anything other than a normal service."""
        return self.status is not StatusKind.NORMAL
