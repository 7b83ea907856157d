"""Ordering and selection of scored hotspots."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from birdbrain.errors import NotFound
from birdbrain.schemas import RankedResult

T = TypeVar("T")

TOP_COUNT = 5

NO_HOTSPOTS_MESSAGE = "No hotspots found for the provided criteria."


def rank_by_score(results: Sequence[RankedResult], limit: int = TOP_COUNT) -> list[RankedResult]:
    """Highest ``score`` first; equal scores ordered by ``loc_id`` ascending."""
    return sorted(results, key=lambda r: (-r.activity.score, r.loc_id))[:limit]


def rank_by_notability(
    results: Sequence[RankedResult], limit: int = TOP_COUNT
) -> list[RankedResult]:
    """Most notable species first, then most checklists, then ``loc_id`` ascending."""
    return sorted(
        results,
        key=lambda r: (-r.activity.observation_count, -r.activity.checklist_count, r.loc_id),
    )[:limit]


def pick_random(candidates: Sequence[T], rng: random.Random | None = None) -> T:
    """Uniformly choose one candidate."""
    if not candidates:
        raise NotFound(NO_HOTSPOTS_MESSAGE)
    return (rng or random).choice(candidates)
