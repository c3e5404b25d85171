"""Tests for ranking merged standings."""

import itertools

import pytest

from src.standings_pipeline.models import MergedStanding
from src.standings_pipeline.ranking import StandingsRanker


def _standing(driver_id, points, score=0):
    return MergedStanding(
        position=0, id=driver_id, car_num=None, car="",
        championship_points=points, championship_score=score,
    )


@pytest.fixture
def ranker():
    return StandingsRanker()


class TestSortOrder:
    def test_points_descending(self, ranker):
        ranked = ranker.rank([_standing("A", 5), _standing("B", 20), _standing("C", 10)])
        assert [s.id for s in ranked] == ["B", "C", "A"]

    def test_score_breaks_points_tie(self, ranker):
        ranked = ranker.rank([_standing("A", 10, score=1), _standing("B", 10, score=4)])
        assert [s.id for s in ranked] == ["B", "A"]

    def test_exact_ties_keep_input_order(self, ranker):
        standings = [_standing(name, 10, score=2) for name in "DCBAE"]
        ranked = ranker.rank(standings)
        assert [s.id for s in ranked] == list("DCBAE")

    def test_mixed_int_and_float_points(self, ranker):
        ranked = ranker.rank([_standing("A", 10), _standing("B", 10.5)])
        assert [s.id for s in ranked] == ["B", "A"]

    def test_negative_points(self, ranker):
        ranked = ranker.rank([_standing("A", -3), _standing("B", 0)])
        assert [s.id for s in ranked] == ["B", "A"]

    def test_pairwise_comparator(self, ranker):
        values = [(10, 5), (10, 5), (8, 9), (10, 7), (0, 0), (8, 1)]
        standings = [_standing(f"d{i}", p, s) for i, (p, s) in enumerate(values)]
        ranked = ranker.rank(standings)

        for a, b in itertools.combinations(ranked, 2):
            key_a = (a.championship_points, a.championship_score)
            key_b = (b.championship_points, b.championship_score)
            assert key_a >= key_b
            if key_a == key_b:
                assert int(a.id[1:]) < int(b.id[1:])


class TestPositions:
    def test_dense_one_based(self, ranker):
        standings = [_standing(f"d{i}", i % 3) for i in range(7)]
        ranked = ranker.rank(standings)
        assert [s.position for s in ranked] == list(range(1, 8))

    def test_ties_still_get_distinct_positions(self, ranker):
        ranked = ranker.rank([_standing("A", 10), _standing("B", 10)])
        assert [s.position for s in ranked] == [1, 2]

    def test_empty(self, ranker):
        assert ranker.rank([]) == []
        assert StandingsRanker.sort_order([]) == []
