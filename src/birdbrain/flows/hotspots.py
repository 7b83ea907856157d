"""
Hotspot ranking pipeline.

One linear async pipeline per request:

    origin (coordinates or postal code)
      → nearby hotspots (eBird ref/hotspot/geo)
      → activity: per-hotspot observation fetches (bounded fan-out)
                  or one radius-wide notable fetch grouped by locId
      → rank / pick

Blocking HTTP calls run in worker threads via ``asyncio.to_thread`` so the
event loop only ever awaits. Nothing is retried; the first failure aborts the
request. No state is shared between requests apart from the injected client.

Usage::

    finder = HotspotFinder.from_settings(get_settings())
    response = asyncio.run(finder.search("top", lat=45.5, lng=-122.6, distance_km=20))
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable
from typing import Any

from birdbrain.analysis.activity import (
    NOTABLE_ROSTER,
    SPECIES_ROSTER,
    summarize_by_location,
    summarize_observations,
)
from birdbrain.analysis.ranking import (
    NO_HOTSPOTS_MESSAGE,
    pick_random,
    rank_by_notability,
    rank_by_score,
)
from birdbrain.concurrency import DEFAULT_CONCURRENCY, map_with_concurrency
from birdbrain.config import Settings
from birdbrain.datasources import zippopotam
from birdbrain.datasources.ebird import (
    MAX_EVALUATED_HOTSPOTS,
    EBirdClient,
    EBirdHotspot,
    fetch_hotspots_by_geo,
    fetch_notable_observations,
    fetch_recent_observations,
    normalize_hotspot,
)
from birdbrain.errors import BadInput, NotFound
from birdbrain.geography import normalize_distance, to_number, validate_postal_code
from birdbrain.schemas import (
    ActivitySummary,
    Mode,
    Origin,
    OriginSource,
    RandomHotspotResponse,
    RankedHotspotsResponse,
    RankedResult,
)

logger = logging.getLogger(__name__)

Geocoder = Callable[[str], tuple[float, float]]


def _ranked(hotspot: EBirdHotspot, origin: Origin, activity: ActivitySummary) -> RankedResult:
    """Normalize a raw hotspot against the origin and attach its activity."""
    return RankedResult(**normalize_hotspot(hotspot, origin).model_dump(), activity=activity)


class HotspotFinder:
    """Resolves locations and ranks nearby hotspots by recent activity."""

    def __init__(
        self,
        client: EBirdClient,
        *,
        geocoder: Geocoder = zippopotam.lookup_postal_code,
        concurrency: int = DEFAULT_CONCURRENCY,
        call_timeout: float | None = None,
        default_distance_km: float = 25.0,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client
        self.geocoder = geocoder
        self.concurrency = concurrency
        self.call_timeout = call_timeout
        self.default_distance_km = default_distance_km
        self.rng = rng

    @classmethod
    def from_settings(cls, settings: Settings) -> HotspotFinder:
        """Wire a finder from settings. Fails fast if the eBird key is missing."""
        client = EBirdClient.from_settings(settings)

        def geocode(postal_code: str) -> tuple[float, float]:
            return zippopotam.lookup_postal_code(postal_code, base_url=settings.zip_lookup_url)

        return cls(
            client,
            geocoder=geocode,
            concurrency=settings.activity_concurrency,
            call_timeout=settings.activity_timeout,
            default_distance_km=settings.default_distance_km,
        )

    # -------------------------------------------------------------------------
    # Input resolution
    # -------------------------------------------------------------------------

    async def resolve_origin(
        self,
        lat: Any = None,
        lng: Any = None,
        postal_code: str | None = None,
    ) -> Origin:
        """
        Build the request origin from coordinates, or geocode a postal code.

        Coordinates win when both ``lat`` and ``lng`` are given.

        Raises:
            BadInput: Neither form supplied, or values malformed.
            NotFound: The postal code has no known location.
        """
        if lat is not None and lng is not None:
            lat_value = to_number(lat, "lat")
            lng_value = to_number(lng, "lng")
            if not -90 <= lat_value <= 90:
                raise BadInput("Invalid lat value")
            if not -180 <= lng_value <= 180:
                raise BadInput("Invalid lng value")
            return Origin(lat=lat_value, lng=lng_value, source=OriginSource.COORDINATES)

        if postal_code:
            code = validate_postal_code(postal_code)
            found_lat, found_lng = await asyncio.to_thread(self.geocoder, code)
            return Origin(
                lat=found_lat,
                lng=found_lng,
                source=OriginSource.POSTAL_CODE,
                postal_code=code,
            )

        raise BadInput("Provide either lat/lng coordinates or a postalCode.")

    # -------------------------------------------------------------------------
    # Pipeline stages
    # -------------------------------------------------------------------------

    async def _nearby_hotspots(self, origin: Origin, distance_km: float) -> list[EBirdHotspot]:
        hotspots = await asyncio.to_thread(
            fetch_hotspots_by_geo,
            self.client,
            origin.lat,
            origin.lng,
            distance_km,
            limit=MAX_EVALUATED_HOTSPOTS,
        )
        if not hotspots:
            raise NotFound(NO_HOTSPOTS_MESSAGE)
        return hotspots

    async def _score_hotspot(self, hotspot: EBirdHotspot, origin: Origin) -> RankedResult:
        records = await asyncio.to_thread(fetch_recent_observations, self.client, hotspot.loc_id)
        activity = summarize_observations(records, SPECIES_ROSTER)
        return _ranked(hotspot, origin, activity)

    # -------------------------------------------------------------------------
    # Modes
    # -------------------------------------------------------------------------

    async def get_random_hotspot(self, origin: Origin, distance_km: float) -> RankedResult:
        """Pick one nearby hotspot uniformly at random and report its activity."""
        distance_km = normalize_distance(distance_km)
        hotspots = await self._nearby_hotspots(origin, distance_km)
        chosen = pick_random(hotspots, self.rng)
        logger.info("Picked %s out of %d hotspots", chosen.loc_id, len(hotspots))
        return await self._score_hotspot(chosen, origin)

    async def get_top_hotspots(self, origin: Origin, distance_km: float) -> list[RankedResult]:
        """Score every nearby hotspot and return the five most active."""
        distance_km = normalize_distance(distance_km)
        hotspots = await self._nearby_hotspots(origin, distance_km)
        scored = await map_with_concurrency(
            hotspots,
            lambda hotspot: self._score_hotspot(hotspot, origin),
            self.concurrency,
            timeout=self.call_timeout,
        )
        logger.info("Scored %d hotspots", len(scored))
        return rank_by_score(scored)

    async def get_notable_hotspots(self, origin: Origin, distance_km: float) -> list[RankedResult]:
        """Return the five nearby hotspots with the most notable species."""
        distance_km = normalize_distance(distance_km)
        hotspots = await self._nearby_hotspots(origin, distance_km)
        by_loc_id = {hotspot.loc_id: hotspot for hotspot in hotspots}

        records = await asyncio.to_thread(
            fetch_notable_observations, self.client, origin.lat, origin.lng, distance_km
        )
        summaries = summarize_by_location(records, NOTABLE_ROSTER)

        results = [
            _ranked(by_loc_id[loc_id], origin, activity)
            for loc_id, activity in summaries.items()
            if loc_id in by_loc_id
        ]
        logger.info(
            "%d notable observations across %d known hotspots", len(records), len(results)
        )
        return rank_by_notability(results)

    # -------------------------------------------------------------------------
    # Request entry point
    # -------------------------------------------------------------------------

    async def search(
        self,
        mode: Mode | str,
        *,
        lat: Any = None,
        lng: Any = None,
        postal_code: str | None = None,
        distance_km: Any = None,
    ) -> RandomHotspotResponse | RankedHotspotsResponse:
        """
        Validate raw request values, run one mode, and wrap the response envelope.

        Input errors are raised before any network call.
        """
        try:
            mode = Mode(mode)
        except ValueError:
            raise BadInput(f"Unknown mode {mode!r}") from None

        distance = normalize_distance(
            self.default_distance_km if distance_km is None else distance_km
        )
        origin = await self.resolve_origin(lat, lng, postal_code)

        if mode is Mode.RANDOM:
            hotspot = await self.get_random_hotspot(origin, distance)
            return RandomHotspotResponse(distance_km=distance, origin=origin, hotspot=hotspot)

        if mode is Mode.TOP:
            ranked = await self.get_top_hotspots(origin, distance)
        else:
            ranked = await self.get_notable_hotspots(origin, distance)
        return RankedHotspotsResponse(
            mode=mode, distance_km=distance, origin=origin, hotspots=ranked
        )
