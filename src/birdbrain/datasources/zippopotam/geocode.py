"""Postal code geocoding."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from birdbrain.datasources.zippopotam.client import ZIP_LOOKUP_URL
from birdbrain.errors import NotFound
from birdbrain.services.http import session as default_session

logger = logging.getLogger(__name__)


def lookup_postal_code(
    postal_code: str,
    *,
    base_url: str = ZIP_LOOKUP_URL,
    session: requests.Session | None = None,
) -> tuple[float, float]:
    """
    Resolve a postal code to ``(lat, lng)``.

    One outbound request, no retry.

    Raises:
        NotFound: The lookup failed or returned no places.
    """
    http = session or default_session
    resp = http.get(f"{base_url}/{quote(postal_code, safe='')}")
    if not resp.ok:
        logger.info("Postal code lookup for %s returned %s", postal_code, resp.status_code)
        raise NotFound(f"Could not resolve postal code {postal_code}")

    data: dict[str, Any] = resp.json() or {}
    places = data.get("places") or []
    if not places:
        raise NotFound(f"No coordinates returned for postal code {postal_code}")

    place = places[0]
    return float(place["latitude"]), float(place["longitude"])
