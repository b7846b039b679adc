"""Background poller running delay alert checks on an interval."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from synca_transit.domain.contracts.poller import PollerProtocol

if TYPE_CHECKING:
    from synca_transit.application.services.delay_alert_service import DelayAlertService

logger = logging.getLogger(__name__)


class DelayAlertPoller(PollerProtocol):
    """Runs DelayAlertService.check every interval_seconds, independent of clients."""

    def __init__(self, alert_service: DelayAlertService, interval_seconds: float) -> None:
        self.alert_service = alert_service
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the poller; a second start while running is ignored."""
        if self.is_running:
            logger.warning("Delay alert poller already running")
            return
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Started delay alert poller (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the poller."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Delay alert poller cancelled")
            logger.info("Stopped delay alert poller")
        self._task = None

    async def _poll_loop(self) -> None:
        try:
            while True:
                await self._check_once()
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.debug("Delay alert poll loop cancelled")
            raise

    async def _check_once(self) -> None:
        try:
            result = await self.alert_service.check()
        except Exception as e:
            logger.error(f"Delay alert check failed: {e}", exc_info=True)
            return
        if result.sent:
            logger.info(f"Delay alert sent for {', '.join(result.notified_lines)}")
