"""Wiring of the services behind the HTTP surface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from synca_transit.adapters.discord import DiscordWebhookNotifier
from synca_transit.adapters.jreast_api import JrEastTrainInformationSource
from synca_transit.adapters.jreast_api.constants import JREAST_RAILWAYS
from synca_transit.adapters.odpt_api import (
    OdptHttpClient,
    OdptRailwayCatalog,
    OdptTrainInformationSource,
)
from synca_transit.adapters.odpt_api.constants import ODPT_AVAILABLE_RAILWAYS
from synca_transit.adapters.overpass_api import OverpassStationLocator
from synca_transit.application.services import (
    DelayAlertService,
    RailwayIndex,
    StatusFeed,
    TrainInfoService,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from synca_transit.adapters.config import AppConfig
    from synca_transit.domain.ports import RailwayResolver, StationLocator

logger = logging.getLogger(__name__)


@dataclass
class TransitServices:
    """Everything the routes need; tests substitute fakes."""

    station_locator: StationLocator
    railway_resolver: RailwayResolver
    train_info: TrainInfoService
    alert_service: DelayAlertService | None = None


def build_services(config: AppConfig, session: ClientSession) -> TransitServices:
    """Create the live services sharing one aiohttp session."""
    odpt_client = OdptHttpClient(
        session,
        api_key=config.odpt_api_key,
        base_url=config.odpt_api_base_url,
        timeout_seconds=config.odpt_api_timeout,
    )

    feeds = [
        StatusFeed(
            name="JR East",
            source=JrEastTrainInformationSource(
                session, url=config.jreast_train_info_url, timeout_seconds=config.jreast_timeout
            ),
            railways=list(JREAST_RAILWAYS),
        )
    ]
    if config.odpt_api_key:
        feeds.append(
            StatusFeed(
                name="ODPT",
                source=OdptTrainInformationSource(odpt_client),
                railways=list(ODPT_AVAILABLE_RAILWAYS),
            )
        )
    else:
        logger.warning("ODPT_API_KEY not set; railway lookup and ODPT statuses are unavailable")
    train_info = TrainInfoService(feeds)

    alert_service = None
    if config.discord_webhook_url:
        alert_service = DelayAlertService(
            status_fetcher=train_info,
            notifier=DiscordWebhookNotifier(session, config.discord_webhook_url),
            monitored_lines=config.delay_alert_lines,
        )

    return TransitServices(
        station_locator=OverpassStationLocator(
            session,
            api_url=config.overpass_api_url,
            timeout_seconds=config.overpass_timeout,
            min_delay_seconds=config.overpass_min_delay_seconds,
        ),
        railway_resolver=RailwayIndex(
            OdptRailwayCatalog(odpt_client), ttl_seconds=config.railway_cache_ttl_seconds
        ),
        train_info=train_info,
        alert_service=alert_service,
    )
