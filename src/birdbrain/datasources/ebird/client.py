"""
eBird API v2 client.

Low-level HTTP access for the eBird API: base URL, query constants, and the
credential header. Every request carries the ``X-eBirdApiToken`` header; the
token is injected once at construction and never read from the environment
while serving a request.

API docs: https://documenter.getpostman.com/view/664302/S1ENwy59
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import SecretStr

from birdbrain.errors import ConfigurationError, UpstreamError
from birdbrain.services.http import DEFAULT_TIMEOUT, create_session

if TYPE_CHECKING:
    import requests

    from birdbrain.config import Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# API configuration
# ---------------------------------------------------------------------------
EBIRD_BASE_URL = "https://api.ebird.org/v2"
API_TOKEN_HEADER = "X-eBirdApiToken"
HOTSPOT_PAGE_URL = "https://ebird.org/hotspot/{loc_id}"

# ---------------------------------------------------------------------------
# Query limits
# ---------------------------------------------------------------------------
RECENT_WINDOW_DAYS = 7  # lookback applied to every activity query
MAX_EVALUATED_HOTSPOTS = 50
HOTSPOT_ACTIVITY_MAX_RESULTS = 500
NEARBY_OBS_MAX_RADIUS_KM = 50  # API ceiling for data/obs/geo queries
NOTABLE_MAX_RESULTS = 500


def dist_param(distance_km: float) -> int | float:
    """Radius as sent on the wire: whole kilometres as an integer (``25``, not ``25.0``)."""
    return int(distance_km) if float(distance_km).is_integer() else distance_km


class EBirdClient:
    """Authenticated access to the eBird API."""

    def __init__(
        self,
        api_key: str | SecretStr | None,
        *,
        base_url: str = EBIRD_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        token = api_key.get_secret_value() if isinstance(api_key, SecretStr) else api_key
        if not token:
            raise ConfigurationError(
                "Missing EBIRD_API_KEY. Set it in the environment or .env before starting."
            )
        self.base_url = base_url.rstrip("/")
        self.session = session or create_session(timeout=timeout)
        self._headers = {API_TOKEN_HEADER: str(token)}

    @classmethod
    def from_settings(cls, settings: Settings) -> EBirdClient:
        """Build a client from application settings."""
        return cls(
            settings.ebird_api_key,
            base_url=settings.ebird_base_url,
            timeout=settings.request_timeout,
        )

    def get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET ``{base_url}/{endpoint}`` and decode the JSON body.

        Raises:
            UpstreamError: Any non-2xx response, carrying its status and body.
        """
        url = f"{self.base_url}/{endpoint}"
        resp = self.session.get(url, params=params or {}, headers=self._headers)
        if not resp.ok:
            logger.warning("eBird %s returned %s", endpoint, resp.status_code)
            raise UpstreamError(resp.status_code, resp.text)
        return resp.json()
