"""Train information feed scraped from the JR East Kanto area page."""

import logging
import re
from typing import TYPE_CHECKING

import aiohttp

from synca_transit.adapters.api_request_logger import log_api_request
from synca_transit.adapters.jreast_api.constants import (
    BLOCK_LENGTH,
    DEFAULT_JREAST_TRAIN_INFO_URL,
    MONITORED_LINES,
    USER_AGENT,
    MonitoredLine,
)
from synca_transit.domain.exceptions import UpstreamError
from synca_transit.domain.models import ErrorDetails, StatusKind, TrainInformation
from synca_transit.domain.ports import TrainInformationSource

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

_STATUS_ICON = re.compile(r"ico_info_(\w+)\.svg")
_STATUS_DETAIL = re.compile(r'<p class="status_Text">([^<]+)</p>')
_LINE_NAME = re.compile(r'<span class="name">')


def parse_status_icon(icon_name: str) -> StatusKind:
    """Map the status icon file name to a status; notices count as normal service."""
    if "normal" in icon_name:
        return StatusKind.NORMAL
    if "delay" in icon_name:
        return StatusKind.DELAY
    if "suspend" in icon_name or "stop" in icon_name:
        return StatusKind.SUSPEND
    return StatusKind.NORMAL


def _parse_line(html: str, line: MonitoredLine) -> TrainInformation | None:
    name_pattern = re.compile(f'<span class="name">{re.escape(line.name)}</span>')
    for match in name_pattern.finditer(html):
        block = html[match.start() : match.start() + BLOCK_LENGTH]
        next_line = _LINE_NAME.search(block, match.end() - match.start())
        if next_line:
            block = block[: next_line.start()]
        icon = _STATUS_ICON.search(block)
        if not icon:
            continue
        detail = _STATUS_DETAIL.search(block)
        return TrainInformation(
            railway_id=line.railway_id,
            status=parse_status_icon(icon.group(1)),
            text=detail.group(1).strip() if detail else None,
        )
    return None


def parse_train_info_html(
    html: str, lines: list[MonitoredLine] = MONITORED_LINES
) -> list[TrainInformation]:
    """Extract one report per monitored line; lines not on the page are normal."""
    reports: list[TrainInformation] = []
    for line in lines:
        report = _parse_line(html, line)
        if report is None:
            logger.debug(f"No status block for {line.name}, assuming normal service")
            report = TrainInformation(railway_id=line.railway_id, status=StatusKind.NORMAL)
        reports.append(report)
    return reports


class JrEastTrainInformationSource(TrainInformationSource):
    """Live train information for the monitored JR East lines."""

    def __init__(
        self,
        session: "ClientSession",
        url: str = DEFAULT_JREAST_TRAIN_INFO_URL,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize the source.

        Args:
            session: aiohttp session used for requests.
            url: Train information page to scrape.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def fetch_train_information(self) -> list[TrainInformation]:
        """Fetch and parse the train information page.

        Raises:
            UpstreamError: If the page cannot be fetched.
        """
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "ja",
        }
        log_api_request("GET", self._url, headers=headers)

        try:
            async with self._session.get(
                self._url, headers=headers, timeout=self._timeout
            ) as response:
                if response.status != 200:
                    raise UpstreamError(
                        f"JR East train info returned HTTP {response.status}",
                        ErrorDetails.from_status(response.status),
                    )
                html = await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Error fetching JR East train info: {e}")
            raise UpstreamError(f"JR East train info fetch failed: {e}") from e

        return parse_train_info_html(html)
