"""Notifier posting messages to a Discord webhook."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import aiohttp

from synca_transit.domain.ports import Notifier

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

WEBHOOK_USERNAME = "Synca"
EMBED_COLOR = 0xF59E0B


class DiscordWebhookNotifier(Notifier):
    """Posts an embed to a Discord channel webhook."""

    def __init__(
        self, session: "ClientSession", webhook_url: str, timeout_seconds: float = 10
    ) -> None:
        """Initialize with the aiohttp session and the webhook URL."""
        self._session = session
        self._webhook_url = webhook_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def notify(self, title: str, body: str) -> bool:
        """Send the message; delivery failures are logged and reported as False."""
        payload = {
            "username": WEBHOOK_USERNAME,
            "embeds": [
                {
                    "title": title,
                    "description": body,
                    "color": EMBED_COLOR,
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            ],
        }
        try:
            async with self._session.post(
                self._webhook_url, json=payload, timeout=self._timeout
            ) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    logger.error(
                        f"Discord webhook returned status {response.status}: {error_text[:200]}"
                    )
                    return False
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Error sending Discord notification: {e}")
            return False
        return True
