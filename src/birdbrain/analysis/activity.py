"""
Activity aggregation: fold observation records into per-hotspot summaries.

A summary counts distinct checklists, counts sightings or distinct species,
and remembers the most recent observation time. Folding is commutative: the
checklist and species collections are keyed by id, and name conflicts for
the same species resolve deterministically, so record order never changes
the result.

``observation_count`` is chosen once, in ``ActivityAccumulator.finalize``:
the number of distinct species when species tracking is on (every ranking
mode), the raw sighting total (``howMany``, default 1) otherwise.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from birdbrain.datasources.ebird.observations import ObservationRecord
from birdbrain.schemas import ActivitySummary, Species

# =============================================================================
# Options
# =============================================================================


@dataclass(frozen=True)
class TrackingOptions:
    """
    What an accumulator records beyond the basic counts.

    ``track_species`` keeps a species roster and makes ``observation_count``
    the distinct-species count. ``track_notable`` additionally exposes that
    roster as ``notable_species``; it has no effect without species tracking.
    """

    track_species: bool = False
    track_notable: bool = False


COUNTS_ONLY = TrackingOptions()
SPECIES_ROSTER = TrackingOptions(track_species=True)
NOTABLE_ROSTER = TrackingOptions(track_species=True, track_notable=True)


# =============================================================================
# Helpers
# =============================================================================


def parse_observation_time(value: str | None) -> datetime | None:
    """Parse an eBird ``obsDt`` (``YYYY-MM-DD[ HH:MM]``) as UTC. None if unparseable."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def collation_key(name: str) -> tuple[str, str]:
    """Locale-style sort key: accents and case ignored first, then exact text."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def species_sort_key(species: Species) -> tuple[str, str, str]:
    return (*collation_key(species.display_name), species.species_code)


def _merge_names(current: Species, record: ObservationRecord) -> Species:
    """Fill missing names; on conflict keep the lexically smaller one."""
    common = _pick_name(current.common_name, record.com_name)
    scientific = _pick_name(current.scientific_name, record.sci_name)
    if common == current.common_name and scientific == current.scientific_name:
        return current
    return Species(
        species_code=current.species_code, common_name=common, scientific_name=scientific
    )


def _pick_name(a: str | None, b: str | None) -> str | None:
    if a is None:
        return b
    if b is None:
        return a
    return min(a, b)


# =============================================================================
# Accumulator
# =============================================================================


@dataclass
class ActivityAccumulator:
    """Running totals for one hotspot (or one group of records)."""

    options: TrackingOptions = COUNTS_ONLY
    checklist_ids: set[str] = field(default_factory=set)
    species: dict[str, Species] = field(default_factory=dict)
    raw_sighting_count: int = 0
    last_observed_at: datetime | None = None

    @property
    def unique_species_count(self) -> int:
        return len(self.species)

    def add(self, record: ObservationRecord) -> None:
        """Fold one record into the totals."""
        if record.sub_id:
            self.checklist_ids.add(record.sub_id)

        self.raw_sighting_count += record.how_many if record.how_many is not None else 1

        observed_at = parse_observation_time(record.obs_dt)
        if observed_at is not None and (
            self.last_observed_at is None or observed_at > self.last_observed_at
        ):
            self.last_observed_at = observed_at

        if self.options.track_species and record.species_code:
            existing = self.species.get(record.species_code)
            if existing is None:
                self.species[record.species_code] = Species(
                    species_code=record.species_code,
                    common_name=record.com_name,
                    scientific_name=record.sci_name,
                )
            else:
                self.species[record.species_code] = _merge_names(existing, record)

    def add_all(self, records: Iterable[ObservationRecord]) -> ActivityAccumulator:
        for record in records:
            self.add(record)
        return self

    def finalize(self) -> ActivitySummary:
        """Build the immutable summary for these totals."""
        if self.options.track_species:
            observation_count = self.unique_species_count
        else:
            observation_count = self.raw_sighting_count

        species_list: list[Species] | None = None
        notable_species: list[Species] | None = None
        if self.options.track_species and self.species:
            species_list = sorted(self.species.values(), key=species_sort_key)
            if self.options.track_notable:
                notable_species = species_list

        return ActivitySummary(
            checklist_count=len(self.checklist_ids),
            observation_count=observation_count,
            last_observation_date=self.last_observed_at,
            species_list=species_list,
            notable_species=notable_species,
        )


# =============================================================================
# Public API
# =============================================================================


def summarize_observations(
    records: Iterable[ObservationRecord],
    options: TrackingOptions = COUNTS_ONLY,
) -> ActivitySummary:
    """Summarize all records as belonging to one hotspot."""
    return ActivityAccumulator(options=options).add_all(records).finalize()


def group_observations_by_location(
    records: Iterable[ObservationRecord],
    options: TrackingOptions = COUNTS_ONLY,
) -> dict[str, ActivityAccumulator]:
    """
    Accumulate records per ``loc_id``, in first-seen order.

    Records without a ``loc_id`` are dropped.
    """
    groups: dict[str, ActivityAccumulator] = {}
    for record in records:
        if not record.loc_id:
            continue
        if record.loc_id not in groups:
            groups[record.loc_id] = ActivityAccumulator(options=options)
        groups[record.loc_id].add(record)
    return groups


def summarize_by_location(
    records: Iterable[ObservationRecord],
    options: TrackingOptions = COUNTS_ONLY,
) -> dict[str, ActivitySummary]:
    """Like ``group_observations_by_location`` but returns finished summaries."""
    return {
        loc_id: accumulator.finalize()
        for loc_id, accumulator in group_observations_by_location(records, options).items()
    }
