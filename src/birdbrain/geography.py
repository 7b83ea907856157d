"""Distance helpers and request-location validation."""

from __future__ import annotations

import math
import re
from typing import Any

from birdbrain.errors import BadInput

EARTH_RADIUS_KM = 6371.0

# Search radius bounds accepted by the hotspot endpoint
MIN_DISTANCE_KM = 1.0
MAX_DISTANCE_KM = 500.0

POSTAL_CODE_PATTERN = re.compile(r"^\d{5}$")


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres, rounded to one decimal place."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 1)


def to_number(value: Any, label: str) -> float:
    """Parse a query value as a finite float, raising ``BadInput`` otherwise."""
    if isinstance(value, bool):
        raise BadInput(f"Invalid {label} value")
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        raise BadInput(f"Invalid {label} value") from None
    if not math.isfinite(numeric):
        raise BadInput(f"Invalid {label} value")
    return numeric


def normalize_distance(value: Any) -> float:
    """Clamp a requested search radius to [1, 500] km."""
    numeric = to_number(value, "distanceKm")
    return min(max(numeric, MIN_DISTANCE_KM), MAX_DISTANCE_KM)


def validate_postal_code(postal_code: str) -> str:
    """Return the trimmed 5-digit postal code or raise ``BadInput``."""
    code = str(postal_code).strip()
    if not POSTAL_CODE_PATTERN.match(code):
        raise BadInput("Enter a valid 5-digit postal code.")
    return code
