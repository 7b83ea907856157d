"""eBird hotspot and observation data source.

Public API:
  - client: EBirdClient (token header, base URL), query limits
  - hotspots: EBirdHotspot, fetch_hotspots_by_geo, normalize_hotspot
  - observations: ObservationRecord, fetch_recent_observations,
    fetch_notable_observations

Every query is limited to the last ``RECENT_WINDOW_DAYS`` days.
"""

from birdbrain.datasources.ebird.client import (
    HOTSPOT_ACTIVITY_MAX_RESULTS,
    MAX_EVALUATED_HOTSPOTS,
    NEARBY_OBS_MAX_RADIUS_KM,
    NOTABLE_MAX_RESULTS,
    RECENT_WINDOW_DAYS,
    EBirdClient,
)
from birdbrain.datasources.ebird.hotspots import (
    EBirdHotspot,
    fetch_hotspots_by_geo,
    normalize_hotspot,
)
from birdbrain.datasources.ebird.observations import (
    ObservationRecord,
    fetch_notable_observations,
    fetch_recent_observations,
)

__all__ = [
    "HOTSPOT_ACTIVITY_MAX_RESULTS",
    "MAX_EVALUATED_HOTSPOTS",
    "NEARBY_OBS_MAX_RADIUS_KM",
    "NOTABLE_MAX_RESULTS",
    "RECENT_WINDOW_DAYS",
    "EBirdClient",
    "EBirdHotspot",
    "ObservationRecord",
    "fetch_hotspots_by_geo",
    "fetch_notable_observations",
    "fetch_recent_observations",
    "normalize_hotspot",
]
