"""
Domain models for the hotspot service.

Pydantic models for everything that leaves the core: the request origin,
normalized hotspots, activity summaries and the per-mode response envelopes.
Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    computed_field,
    field_serializer,
    model_serializer,
)
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model: immutable, camelCase aliases, accepts either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def _drop_none(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Remove optional keys whose value is None (either spelling)."""
    for key in keys:
        if key in data and data[key] is None:
            del data[key]
    return data


# =============================================================================
# Request origin
# =============================================================================


class Mode(StrEnum):
    """Ranking modes."""

    RANDOM = "random"
    TOP = "top"
    NOTABLE = "notable"


class OriginSource(StrEnum):
    """How the request location was supplied."""

    COORDINATES = "coordinates"
    POSTAL_CODE = "postalCode"


class Origin(WireModel):
    """Reference point for every distance in a response."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    source: OriginSource = OriginSource.COORDINATES
    postal_code: str | None = None

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _drop_none(handler(self), "postalCode", "postal_code")


# =============================================================================
# Activity
# =============================================================================


class Species(WireModel):
    """A species seen at a hotspot."""

    species_code: str
    common_name: str | None = None
    scientific_name: str | None = None

    @property
    def display_name(self) -> str:
        """Common name if present, else scientific, else empty."""
        if self.common_name is not None:
            return self.common_name
        return self.scientific_name if self.scientific_name is not None else ""


class ActivitySummary(WireModel):
    """
    Recent activity at one hotspot.

    ``score`` is derived, so ``score == checklist_count * 2 + observation_count``
    holds for every instance. The species fields are None when species
    tracking was not requested (or nothing was seen) and are then omitted from
    the payload entirely.
    """

    checklist_count: int = Field(default=0, ge=0)
    observation_count: int = Field(default=0, ge=0)
    last_observation_date: datetime | None = None
    species_list: list[Species] | None = None
    notable_species: list[Species] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        return self.checklist_count * 2 + self.observation_count

    @field_serializer("last_observation_date")
    def _serialize_date(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return _drop_none(
            handler(self), "speciesList", "species_list", "notableSpecies", "notable_species"
        )


# =============================================================================
# Hotspots
# =============================================================================


class Hotspot(WireModel):
    """A provider-catalogued birding location, normalized for clients."""

    loc_id: str
    name: str
    latitude: float
    longitude: float
    country_code: str | None = None
    region_code: str | None = None
    distance_km: float | None = None
    url: str


class RankedResult(Hotspot):
    """A hotspot paired with its activity summary."""

    activity: ActivitySummary


# =============================================================================
# Response envelopes
# =============================================================================


class RandomHotspotResponse(WireModel):
    """Result of the ``random`` mode."""

    mode: Mode = Mode.RANDOM
    distance_km: float
    origin: Origin
    hotspot: RankedResult


class RankedHotspotsResponse(WireModel):
    """Result of the ``top`` and ``notable`` modes."""

    mode: Mode
    distance_km: float
    origin: Origin
    hotspots: list[RankedResult] = Field(default_factory=list)


class HealthStatus(WireModel):
    """Liveness payload."""

    status: str = "ok"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
