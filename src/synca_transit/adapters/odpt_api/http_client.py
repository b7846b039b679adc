"""HTTP client for ODPT API v4 requests.

API Documentation: https://developer.odpt.org/documents
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from synca_transit.adapters.api_request_logger import log_api_request
from synca_transit.adapters.odpt_api.constants import DEFAULT_ODPT_API_BASE_URL
from synca_transit.domain.exceptions import ConfigurationError, UpstreamError
from synca_transit.domain.models import ErrorDetails

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class OdptHttpClient:
    """Thin JSON client for the ODPT API."""

    def __init__(
        self,
        session: "ClientSession",
        api_key: str | None,
        base_url: str = DEFAULT_ODPT_API_BASE_URL,
        timeout_seconds: float = 10,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session used for requests.
            api_key: ODPT consumer key. Requests fail with ConfigurationError without one.
            base_url: API base URL.
            timeout_seconds: Total timeout per request.
        """
        self._session = session
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def get(
        self, endpoint: str, params: dict[str, str] | None = None
    ) -> list[dict[str, Any]]:
        """GET an ODPT endpoint and return its JSON array.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamError: If the API cannot be reached or answers with an error.
        """
        if not self._api_key:
            raise ConfigurationError("ODPT_API_KEY is not set")

        url = f"{self._base_url}/{endpoint}"
        query = {"acl:consumerKey": self._api_key, **(params or {})}
        log_api_request("GET", url, params=query)

        try:
            async with self._session.get(
                url,
                params=query,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"ODPT API returned status {response.status} for {endpoint}: "
                        f"{error_text[:200]}"
                    )
                    raise UpstreamError(
                        f"ODPT API error: {response.status} {response.reason}",
                        ErrorDetails.from_status(response.status),
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Error fetching ODPT {endpoint}: {e}")
            raise UpstreamError(f"ODPT API fetch failed: {e}") from e

        if not isinstance(data, list):
            raise UpstreamError(f"ODPT API returned unexpected payload for {endpoint}")
        return data
