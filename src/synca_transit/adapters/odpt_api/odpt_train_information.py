"""Train information feed adapter reading ODPT odpt:TrainInformation."""

import logging
from typing import Any

from synca_transit.adapters.odpt_api.constants import (
    ODPT_STATUS_KEYWORDS,
    ODPT_STATUS_MAP,
    ODPT_TRAIN_INFORMATION_ENDPOINT,
)
from synca_transit.adapters.odpt_api.http_client import OdptHttpClient
from synca_transit.domain.models import StatusKind, TrainInformation
from synca_transit.domain.ports import TrainInformationSource

logger = logging.getLogger(__name__)


def _status_from_text(text: str) -> StatusKind:
    for keyword, status in ODPT_STATUS_KEYWORDS:
        if keyword in text:
            return status
    return StatusKind.NORMAL


def convert_status(odpt_status: str | dict[str, str] | None) -> StatusKind:
    """Map an odpt:trainInformationStatus value; unknown or missing means normal.

    Some operators publish a code ("odpt:Delay"), others a multilingual
    title ({"ja": "遅延"}), which is classified by keyword.
    """
    if not odpt_status:
        return StatusKind.NORMAL
    if isinstance(odpt_status, dict):
        return _status_from_text(odpt_status.get("ja") or "")
    return ODPT_STATUS_MAP.get(odpt_status, StatusKind.NORMAL)


def parse_train_information(data: dict[str, Any]) -> TrainInformation | None:
    """Convert one odpt:TrainInformation record; None for operator-wide records."""
    railway_id = data.get("odpt:railway")
    if not railway_id:
        return None
    return TrainInformation(
        railway_id=railway_id,
        status=convert_status(data.get("odpt:trainInformationStatus")),
        text=(data.get("odpt:trainInformationText") or {}).get("ja"),
        cause=(data.get("odpt:trainInformationCause") or {}).get("ja"),
    )


class OdptTrainInformationSource(TrainInformationSource):
    """Live train information published by ODPT."""

    def __init__(self, http_client: OdptHttpClient) -> None:
        """Initialize with an ODPT HTTP client."""
        self._http_client = http_client

    async def fetch_train_information(self) -> list[TrainInformation]:
        """Return the train information reports for all operators."""
        records = await self._http_client.get(ODPT_TRAIN_INFORMATION_ENDPOINT)
        reports = [info for info in map(parse_train_information, records) if info is not None]
        logger.debug(f"Fetched {len(reports)} train information reports from ODPT")
        return reports
