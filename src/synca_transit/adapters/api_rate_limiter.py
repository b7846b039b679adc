"""Pacing of outgoing requests to one upstream API.

Public Overpass instances ask clients to leave a gap between queries and
answer bursts with HTTP 429, so every caller of an endpoint shares one
limiter which also honours the server's back-off requests.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import ClassVar

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Keeps at least min_delay_seconds between requests to one upstream."""

    _instances: ClassVar[dict[str, ApiRateLimiter]] = {}
    _registry_lock: ClassVar[asyncio.Lock | None] = None

    def __init__(self, api_name: str, min_delay_seconds: float = 1.0) -> None:
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self._next_allowed_at: float | None = None
        self._lock = asyncio.Lock()

    @classmethod
    async def get_instance(cls, api_name: str, min_delay_seconds: float = 1.0) -> ApiRateLimiter:
        """Shared limiter for api_name, created on first use."""
        if cls._registry_lock is None:
            cls._registry_lock = asyncio.Lock()

        async with cls._registry_lock:
            limiter = cls._instances.get(api_name)
            if limiter is None:
                limiter = cls(api_name, min_delay_seconds)
                cls._instances[api_name] = limiter
                logger.info(f"Pacing {api_name} with {min_delay_seconds}s between requests")
            return limiter

    @classmethod
    def reset_all(cls) -> None:
        """Forget every shared limiter."""
        cls._instances.clear()
        cls._registry_lock = None

    def back_off(self, seconds: float) -> None:
        """Hold further requests for at least `seconds`, e.g. after HTTP 429."""
        resume_at = time.monotonic() + seconds
        if self._next_allowed_at is None or resume_at > self._next_allowed_at:
            self._next_allowed_at = resume_at
            logger.warning(f"{self.api_name}: backing off for {seconds:.1f}s")

    async def acquire(self) -> None:
        """Wait for this caller's turn."""
        async with self._lock:
            if self._next_allowed_at is not None:
                wait_time = self._next_allowed_at - time.monotonic()
                if wait_time > 0:
                    logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                    await asyncio.sleep(wait_time)
            self._next_allowed_at = time.monotonic() + self.min_delay_seconds

    async def __aenter__(self) -> ApiRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: Exception | None, _exc_tb: object
    ) -> None:
        return None
