"""Merging live train information feeds into a full set of railway statuses."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from synca_transit.domain.models import (
    DEFAULT_STATUS_TEXTS,
    NORMAL_STATUS_TEXT,
    RailwayRef,
    RailwayStatus,
    StatusKind,
    TrainInformation,
)

if TYPE_CHECKING:
    from synca_transit.domain.ports import TrainInformationSource

logger = logging.getLogger(__name__)

SHORT_TEXT_LIMIT = 30


@dataclass(frozen=True)
class StatusFeed:
    """A train information source together with the railways it covers."""

    name: str
    source: TrainInformationSource
    railways: list[RailwayRef] = field(default_factory=list)


def normalize_status_text(status: StatusKind, text: str | None) -> str:
    """Uniform text for normal service, upstream text otherwise, else a default."""
    if status is StatusKind.NORMAL:
        return NORMAL_STATUS_TEXT
    if text:
        return text
    return DEFAULT_STATUS_TEXTS[status]


def shorten_text(text: str, limit: int = SHORT_TEXT_LIMIT) -> str:
    """Cut text to `limit` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class TrainInfoService:
    """Status fetcher covering every railway of every configured feed."""

    def __init__(self, feeds: list[StatusFeed]) -> None:
        """Initialize with the feeds to merge, in display order."""
        self._feeds = feeds

    @property
    def known_railways(self) -> list[RailwayRef]:
        """Every railway covered by the configured feeds."""
        return [railway for feed in self._feeds for railway in feed.railways]

    async def fetch_all_statuses(self) -> list[RailwayStatus]:
        """Return the status of every known railway.

        Feeds are queried concurrently. A failing feed is logged and its
        railways are reported as running normally.
        """
        reports = await asyncio.gather(*(self._fetch_feed(feed) for feed in self._feeds))

        statuses: list[RailwayStatus] = []
        for feed, feed_reports in zip(self._feeds, reports, strict=True):
            by_railway = {report.railway_id: report for report in feed_reports}
            for railway in feed.railways:
                statuses.append(self._to_status(railway, by_railway.get(railway.railway_id)))
        return statuses

    async def statuses_for(self, railway_ids: list[str]) -> dict[str, dict[str, str | None]]:
        """Return a short status entry for each requested railway id.

        Ids with no report are treated as running normally. Upstream texts are
        shortened for compact display.
        """
        reports = await asyncio.gather(*(self._fetch_feed(feed) for feed in self._feeds))
        by_railway: dict[str, TrainInformation] = {}
        for feed_reports in reports:
            for report in feed_reports:
                by_railway.setdefault(report.railway_id, report)

        result: dict[str, dict[str, str | None]] = {}
        for railway_id in railway_ids:
            report = by_railway.get(railway_id)
            if report is None:
                result[railway_id] = {
                    "status": StatusKind.NORMAL.value,
                    "statusText": NORMAL_STATUS_TEXT,
                }
                continue
            text = shorten_text(report.text) if report.text else None
            entry: dict[str, str | None] = {
                "status": report.status.value,
                "statusText": text or DEFAULT_STATUS_TEXTS[report.status],
            }
            if report.cause:
                entry["cause"] = report.cause
            result[railway_id] = entry
        return result

    async def _fetch_feed(self, feed: StatusFeed) -> list[TrainInformation]:
        try:
            return await feed.source.fetch_train_information()
        except Exception as e:
            logger.error(f"Failed to fetch train information from {feed.name}: {e}")
            return []

    @staticmethod
    def _to_status(railway: RailwayRef, report: TrainInformation | None) -> RailwayStatus:
        if report is None:
            return RailwayStatus(
                railway_id=railway.railway_id,
                railway_name=railway.railway_name,
                operator=railway.operator,
                status=StatusKind.NORMAL,
                status_text=NORMAL_STATUS_TEXT,
            )
        return RailwayStatus(
            railway_id=railway.railway_id,
            railway_name=railway.railway_name,
            operator=railway.operator,
            status=report.status,
            status_text=normalize_status_text(report.status, report.text),
            cause=report.cause,
        )
