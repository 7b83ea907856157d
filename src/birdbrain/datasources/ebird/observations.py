"""Recent observation fetching and parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from birdbrain.datasources.ebird.client import (
    HOTSPOT_ACTIVITY_MAX_RESULTS,
    NEARBY_OBS_MAX_RADIUS_KM,
    NOTABLE_MAX_RESULTS,
    RECENT_WINDOW_DAYS,
    EBirdClient,
    dist_param,
)
from birdbrain.errors import UpstreamError

# Point-fetch statuses meaning "hotspot gone or never reported", not failure
EMPTY_HOTSPOT_STATUSES = frozenset({404, 410})

# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class ObservationRecord:
    """One species sighting on one checklist, as reported by eBird."""

    loc_id: str | None
    sub_id: str | None
    species_code: str | None
    com_name: str | None = None
    sci_name: str | None = None
    how_many: int | None = None
    obs_dt: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ObservationRecord:
        """Build a record from an API dict. Missing fields become None."""
        how_many = data.get("howMany")
        if isinstance(how_many, bool) or not isinstance(how_many, int):
            how_many = None
        return cls(
            loc_id=data.get("locId"),
            sub_id=data.get("subId"),
            species_code=data.get("speciesCode"),
            com_name=data.get("comName"),
            sci_name=data.get("sciName"),
            how_many=how_many,
            obs_dt=data.get("obsDt"),
        )


def _parse_records(raw: Any) -> list[ObservationRecord]:
    if not isinstance(raw, list):
        return []
    return [ObservationRecord.from_json(item) for item in raw if isinstance(item, dict)]


# =============================================================================
# API Fetching
# =============================================================================


def fetch_recent_observations(client: EBirdClient, loc_id: str) -> list[ObservationRecord]:
    """
    Fetch up to 500 observations from the last week at one hotspot.

    A 404 or 410 from eBird yields an empty list.

    Raises:
        UpstreamError: Any other non-success response.
    """
    params = {
        "back": RECENT_WINDOW_DAYS,
        "maxResults": HOTSPOT_ACTIVITY_MAX_RESULTS,
    }
    try:
        raw = client.get_json(f"data/obs/{quote(loc_id, safe='')}/recent", params)
    except UpstreamError as exc:
        if exc.status_code in EMPTY_HOTSPOT_STATUSES:
            return []
        raise
    return _parse_records(raw)


def fetch_notable_observations(
    client: EBirdClient,
    lat: float,
    lng: float,
    distance_km: float,
) -> list[ObservationRecord]:
    """
    Fetch notable (rare/unusual) hotspot observations around a point.

    One call covers every hotspot in the radius. The radius is capped at
    50 km, the API maximum for this endpoint.

    Raises:
        UpstreamError: Non-success response from eBird.
    """
    params: dict[str, Any] = {
        "lat": lat,
        "lng": lng,
        "dist": dist_param(min(distance_km, NEARBY_OBS_MAX_RADIUS_KM)),
        "back": RECENT_WINDOW_DAYS,
        "hotspot": "true",
        "maxResults": NOTABLE_MAX_RESULTS,
    }
    raw = client.get_json("data/obs/geo/recent/notable", params)
    return _parse_records(raw)
