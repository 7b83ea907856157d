"""Tests for hotspot ordering and selection."""

from __future__ import annotations

import random

import pytest

from birdbrain.analysis.ranking import TOP_COUNT, pick_random, rank_by_notability, rank_by_score
from birdbrain.errors import NotFound
from birdbrain.schemas import ActivitySummary, RankedResult


def ranked(loc_id: str, checklists: int = 0, observations: int = 0) -> RankedResult:
    return RankedResult(
        loc_id=loc_id,
        name=f"Hotspot {loc_id}",
        latitude=45.0,
        longitude=-122.0,
        url=f"https://ebird.org/hotspot/{loc_id}",
        activity=ActivitySummary(checklist_count=checklists, observation_count=observations),
    )


class TestRankByScore:
    """Top mode ordering."""

    def test_top_five_descending(self) -> None:
        scores = [10, 30, 20, 5, 40, 25]
        results = [ranked(f"L{i}", observations=s) for i, s in enumerate(scores)]

        top = rank_by_score(results)

        assert [r.activity.score for r in top] == [40, 30, 25, 20, 10]
        assert len(top) == TOP_COUNT

    def test_ties_broken_by_loc_id(self) -> None:
        results = [ranked("L3", observations=5), ranked("L1", observations=5), ranked("L2", 1, 3)]
        assert [r.loc_id for r in rank_by_score(results)] == ["L1", "L2", "L3"]

    def test_fewer_than_limit(self) -> None:
        assert len(rank_by_score([ranked("L1"), ranked("L2")])) == 2

    def test_does_not_mutate_input(self) -> None:
        results = [ranked("L1", observations=1), ranked("L2", observations=2)]
        rank_by_score(results)
        assert [r.loc_id for r in results] == ["L1", "L2"]


class TestRankByNotability:
    """Notable mode ordering."""

    def test_tie_on_species_broken_by_checklists(self) -> None:
        results = [
            ranked("A", checklists=2, observations=3),
            ranked("B", checklists=5, observations=3),
            ranked("C", checklists=9, observations=1),
        ]
        assert [r.loc_id for r in rank_by_notability(results)] == ["B", "A", "C"]

    def test_full_tie_broken_by_loc_id(self) -> None:
        results = [ranked("L9", 1, 1), ranked("L2", 1, 1)]
        assert [r.loc_id for r in rank_by_notability(results)] == ["L2", "L9"]

    def test_limit(self) -> None:
        results = [ranked(f"L{i}", 1, i) for i in range(8)]
        top = rank_by_notability(results)
        assert [r.activity.observation_count for r in top] == [7, 6, 5, 4, 3]


class TestPickRandom:
    """Random mode selection."""

    def test_empty_is_not_found(self) -> None:
        with pytest.raises(NotFound, match="No hotspots found"):
            pick_random([])

    def test_single_candidate(self) -> None:
        assert pick_random(["only"]) == "only"

    def test_seeded_rng_is_deterministic(self) -> None:
        candidates = list(range(50))
        assert pick_random(candidates, random.Random(7)) == pick_random(
            candidates, random.Random(7)
        )

    def test_every_candidate_reachable(self) -> None:
        rng = random.Random(0)
        seen = {pick_random(["a", "b", "c"], rng) for _ in range(200)}
        assert seen == {"a", "b", "c"}
