"""
Tests for quality filtering and top-N selection.
"""
import pytest
from datetime import timedelta

from vaultmem.algos.mem_scoring.selection import (
    filter_by_quality,
    load_top_memories,
    rank_memories,
    score_memories,
)
from vaultmem.models.dto.ranking import RankingConfig


class TestFilterByQuality:
    """Below-threshold memories drop out; unscored memories stay."""

    def test_drops_low_quality(self, make_entry):
        keep = make_entry(session_id="keep", quality=0.8)
        drop = make_entry(session_id="drop", quality=0.1)

        assert filter_by_quality([keep, drop], 0.3) == [keep]

    def test_threshold_is_inclusive(self, make_entry):
        edge = make_entry(quality=0.3)
        assert filter_by_quality([edge], 0.3) == [edge]

    def test_keeps_unscored(self, make_entry):
        unscored = make_entry(session_id="unscored")
        assert filter_by_quality([unscored], 0.9) == [unscored]

    @pytest.mark.parametrize("threshold", [None, 0, 0.0, -1])
    def test_disabled_threshold_returns_input(self, make_entry, threshold):
        entries = [
            make_entry(session_id="a", quality=0.01),
            make_entry(session_id="b"),
            make_entry(session_id="c", quality=0.9),
        ]
        assert filter_by_quality(entries, threshold) == entries

    def test_preserves_order(self, make_entry):
        entries = [make_entry(session_id=str(i), quality=0.5 + i / 100) for i in range(5)]
        assert filter_by_quality(entries, 0.5) == entries

    def test_empty_input(self):
        assert filter_by_quality([], 0.3) == []


class TestRankMemories:
    """Stable sort by descending ranking score."""

    def test_highest_score_first(self, make_entry, now):
        weak = make_entry(session_id="weak", age=timedelta(days=200), quality=0.3)
        strong = make_entry(session_id="strong", age=timedelta(days=1), quality=0.9)

        ranked = rank_memories([weak, strong], reference_time=now)

        assert [e.session_id for e in ranked] == ["strong", "weak"]

    def test_ties_keep_input_order(self, make_entry, now):
        entries = [
            make_entry(session_id=sid, age=timedelta(days=5), quality=0.6)
            for sid in ("first", "second", "third")
        ]

        ranked = rank_memories(entries, reference_time=now)

        assert [e.session_id for e in ranked] == ["first", "second", "third"]

    def test_empty_and_singleton(self, make_entry, now):
        only = make_entry()
        assert rank_memories([], reference_time=now) == []
        assert rank_memories([only], reference_time=now) == [only]

    def test_does_not_reorder_input(self, make_entry, now):
        entries = [
            make_entry(session_id="old", age=timedelta(days=300), quality=0.5),
            make_entry(session_id="new", age=timedelta(hours=1), quality=0.5),
        ]
        rank_memories(entries, reference_time=now)
        assert [e.session_id for e in entries] == ["old", "new"]

    def test_scores_are_descending(self, make_entry, now):
        entries = [
            make_entry(session_id=str(d), age=timedelta(days=d), quality=(d % 7) / 7)
            for d in range(0, 200, 13)
        ]
        scores = [score for _, score in score_memories(entries, reference_time=now)]
        assert scores == sorted(scores, reverse=True)


class TestLoadTopMemories:
    """Filter, rank, truncate."""

    def test_returns_best_three(self, make_entry, now):
        entries = [
            make_entry(session_id="old-good", age=timedelta(days=30), quality=0.9),
            make_entry(session_id="fresh-weak", age=timedelta(hours=1), quality=0.4),
            make_entry(session_id="junk", age=timedelta(hours=1), quality=0.1),
            make_entry(session_id="mid", age=timedelta(days=60), quality=0.6),
            make_entry(session_id="ancient", age=timedelta(days=400), quality=0.35),
        ]

        top = load_top_memories(entries, 3, reference_time=now)

        assert [e.session_id for e in top] == ["old-good", "mid", "fresh-weak"]

    def test_fewer_than_limit_when_filtered(self, make_entry, now):
        entries = [
            make_entry(session_id="good", quality=0.8),
            make_entry(session_id="bad-1", quality=0.1),
            make_entry(session_id="bad-2", quality=0.2),
        ]

        top = load_top_memories(entries, 3, reference_time=now)

        assert [e.session_id for e in top] == ["good"]

    def test_length_is_min_of_limit_and_passing(self, make_entry, now):
        entries = [make_entry(session_id=str(i), quality=0.5) for i in range(6)]
        assert len(load_top_memories(entries, 4, reference_time=now)) == 4
        assert len(load_top_memories(entries, 10, reference_time=now)) == 6

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit(self, make_entry, now, limit):
        assert load_top_memories([make_entry(quality=0.9)], limit, reference_time=now) == []

    def test_empty_input(self, now):
        assert load_top_memories([], 3, reference_time=now) == []

    def test_unscored_memories_compete_on_recency(self, make_entry, now):
        unscored = make_entry(session_id="unscored", age=timedelta(hours=2))
        scored = make_entry(session_id="scored", age=timedelta(hours=2), quality=0.5)

        top = load_top_memories([scored, unscored], 3, reference_time=now)

        assert [e.session_id for e in top] == ["unscored", "scored"]

    def test_custom_threshold(self, make_entry, now):
        config = RankingConfig(min_quality_score=0.7)
        entries = [
            make_entry(session_id="a", quality=0.65),
            make_entry(session_id="b", quality=0.75),
        ]

        top = load_top_memories(entries, 3, config, now)

        assert [e.session_id for e in top] == ["b"]
