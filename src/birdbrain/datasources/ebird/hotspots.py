"""Hotspot lookup and normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from birdbrain.datasources.ebird.client import (
    HOTSPOT_PAGE_URL,
    MAX_EVALUATED_HOTSPOTS,
    RECENT_WINDOW_DAYS,
    EBirdClient,
    dist_param,
)
from birdbrain.geography import haversine_km
from birdbrain.schemas import Hotspot

if TYPE_CHECKING:
    from birdbrain.schemas import Origin

logger = logging.getLogger(__name__)

# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class EBirdHotspot:
    """A hotspot record as returned by ``ref/hotspot/geo``."""

    loc_id: str
    loc_name: str
    lat: float
    lng: float
    country_code: str | None = None
    subnational1_code: str | None = None
    distance_km: float | None = None  # only if the provider sent one


# =============================================================================
# Parsing
# =============================================================================


def _parse_hotspot(data: dict[str, Any]) -> EBirdHotspot | None:
    """Parse one raw hotspot. Returns None if id or coordinates are missing."""
    loc_id = data.get("locId")
    if not loc_id:
        return None
    try:
        lat = float(data["lat"])
        lng = float(data["lng"])
    except (KeyError, TypeError, ValueError):
        return None

    upstream_distance = data.get("distanceKm", data.get("distance"))
    return EBirdHotspot(
        loc_id=str(loc_id),
        loc_name=data.get("locName") or str(loc_id),
        lat=lat,
        lng=lng,
        country_code=data.get("countryCode"),
        subnational1_code=data.get("subnational1Code"),
        distance_km=float(upstream_distance) if upstream_distance is not None else None,
    )


def normalize_hotspot(hotspot: EBirdHotspot, origin: Origin | None = None) -> Hotspot:
    """
    Convert a raw hotspot into the client-facing model.

    With an origin, ``distance_km`` is the haversine distance from it and any
    upstream distance is ignored.
    """
    if origin is not None:
        distance = haversine_km(origin.lat, origin.lng, hotspot.lat, hotspot.lng)
    else:
        distance = hotspot.distance_km
    return Hotspot(
        loc_id=hotspot.loc_id,
        name=hotspot.loc_name,
        latitude=hotspot.lat,
        longitude=hotspot.lng,
        country_code=hotspot.country_code,
        region_code=hotspot.subnational1_code,
        distance_km=distance,
        url=HOTSPOT_PAGE_URL.format(loc_id=hotspot.loc_id),
    )


# =============================================================================
# API Fetching
# =============================================================================


def fetch_hotspots_by_geo(
    client: EBirdClient,
    lat: float,
    lng: float,
    distance_km: float,
    *,
    limit: int = MAX_EVALUATED_HOTSPOTS,
) -> list[EBirdHotspot]:
    """
    Fetch hotspots with activity in the last week within ``distance_km``.

    Returns at most ``limit`` hotspots in provider order. An empty list means
    nothing matched; it is not an error here.

    Raises:
        UpstreamError: Non-success response from eBird.
    """
    params: dict[str, Any] = {
        "lat": lat,
        "lng": lng,
        "dist": dist_param(distance_km),
        "back": RECENT_WINDOW_DAYS,
        "fmt": "json",
        "maxResults": limit,
    }
    raw = client.get_json("ref/hotspot/geo", params)
    if not isinstance(raw, list):
        return []

    hotspots: list[EBirdHotspot] = []
    for item in raw:
        parsed = _parse_hotspot(item) if isinstance(item, dict) else None
        if parsed is not None:
            hotspots.append(parsed)
    logger.debug("Found %d hotspots within %s km of (%s, %s)", len(hotspots), distance_km, lat, lng)
    return hotspots[:limit]
