"""Delay alerts for a fixed set of monitored railway lines."""

import logging
from typing import TYPE_CHECKING

from synca_transit.domain.models import AlertResult, RailwayStatus

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from synca_transit.domain.ports import Notifier, StatusFetcher

ALERT_TITLE = "Train delay information"


class DelayAlertService:
    """Notifies once per disruption of a monitored line."""

    def __init__(
        self,
        status_fetcher: "StatusFetcher",
        notifier: "Notifier",
        monitored_lines: list[str],
    ) -> None:
        """Initialize the service.

        Args:
            status_fetcher: Source of all railway statuses.
            notifier: Where alerts are delivered.
            monitored_lines: Line names to watch; a status matches when its
                railway name contains one of them.
        """
        self._status_fetcher = status_fetcher
        self._notifier = notifier
        self.monitored_lines = monitored_lines
        self._last_notified: dict[str, str] = {}

    def _monitored_name(self, status: RailwayStatus) -> str | None:
        for line in self.monitored_lines:
            if line == status.railway_name or line in status.railway_name:
                return line
        return None

    async def check(self) -> AlertResult:
        """Fetch statuses and notify about newly disrupted monitored lines."""
        statuses = await self._status_fetcher.fetch_all_statuses()

        disrupted: dict[str, RailwayStatus] = {}
        for status in statuses:
            line = self._monitored_name(status)
            if line is not None and status.is_disrupted and line not in disrupted:
                disrupted[line] = status

        if not disrupted:
            # Disruptions are over; the next one is news again
            self._last_notified.clear()
            return AlertResult()

        new_lines = [
            line
            for line, status in disrupted.items()
            if self._last_notified.get(line) != status.status_text
        ]
        if not new_lines:
            logger.debug(f"Already notified about {', '.join(disrupted)}")
            return AlertResult(disrupted_lines=list(disrupted))

        body = "\n".join(f"{line}: {disrupted[line].status_text}" for line in new_lines)
        sent = await self._notifier.notify(ALERT_TITLE, body)
        if sent:
            for line in new_lines:
                self._last_notified[line] = disrupted[line].status_text
            logger.info(f"Sent delay alert for {', '.join(new_lines)}")
        else:
            logger.warning(f"Delay alert for {', '.join(new_lines)} was not delivered")

        return AlertResult(disrupted_lines=list(disrupted), notified_lines=new_lines, sent=sent)
