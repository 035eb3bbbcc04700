"""
Tests for heuristic quality scoring.
"""
import pytest
from datetime import timedelta

from vaultmem.algos.mem_scoring.quality import (
    compute_accuracy,
    compute_completeness,
    compute_quality_score,
    compute_relevance,
    has_resolution_evidence,
)
from vaultmem.models.memories import SessionMemory


def _memory(now, **fields) -> SessionMemory:
    base = {
        "session_id": "s-q",
        "node_id": "vault",
        "node_name": "Vault",
        "timestamp": now - timedelta(days=1),
    }
    base.update(fields)
    return SessionMemory(**base)


SECTIONS = {
    "title": "Title",
    "current_state": "State",
    "task_spec": "Spec",
    "workflow": "Steps",
    "errors": "Timeout",
    "learnings": "Learned",
    "key_results": "Results",
}


class TestCompleteness:
    """Share of the seven sections that are filled."""

    def test_all_sections_filled(self, now):
        assert compute_completeness(_memory(now, **SECTIONS)) == 1.0

    def test_no_sections_filled(self, now):
        assert compute_completeness(_memory(now)) == 0.0

    def test_proportional(self, now):
        memory = _memory(now, title="Title", workflow="Steps", errors="Timeout")
        assert compute_completeness(memory) == pytest.approx(3 / 7)

    def test_whitespace_only_counts_as_empty(self, now):
        memory = _memory(now, title="   ", learnings="\n\t")
        assert compute_completeness(memory) == 0.0


class TestAccuracy:
    """Base 0.5, raised by error tracking and documented resolution."""

    def test_no_evidence_is_exactly_base(self, now):
        assert compute_accuracy(_memory(now)) == 0.5

    def test_error_tracking_alone(self, now):
        score = compute_accuracy(_memory(now, errors="Build failed on step 3"))
        assert 0.5 < score < 0.7

    def test_error_tracking_with_resolution(self, now):
        memory = _memory(
            now,
            errors="Build failed on step 3",
            learnings="Pinning the compiler version fixed it",
        )
        score = compute_accuracy(memory)
        assert 0.6 < score <= 1.0
        assert score > compute_accuracy(_memory(now, errors="Build failed on step 3"))

    def test_resolution_in_key_results(self, now):
        memory = _memory(now, errors="Flaky test", key_results="All tests passed")
        assert compute_accuracy(memory) > 0.6

    def test_resolution_without_errors_is_modest(self, now):
        memory = _memory(now, key_results="Task completed")
        assert 0.5 < compute_accuracy(memory) < 0.7

    def test_resolution_words_are_whole_words(self, now):
        memory = _memory(now, learnings="The undone tasks remain")
        assert not has_resolution_evidence(memory)

    def test_resolution_match_is_case_insensitive(self, now):
        memory = _memory(now, learnings="RESOLVED after restart")
        assert has_resolution_evidence(memory)


class TestRelevance:
    """Tags × 0.4 + summary × 0.3 + command × 0.3, each saturating."""

    def test_minimal_record_is_near_zero(self, now):
        memory = _memory(now, tags=[], summary="", command="x")
        assert compute_relevance(memory) < 0.05

    def test_rich_record_is_near_one(self, now):
        memory = _memory(
            now,
            tags=["a", "b", "c", "d", "e", "f"],
            summary="s" * 150,
            command="generate-report --weekly",
        )
        assert compute_relevance(memory) > 0.9

    def test_duplicate_tags_do_not_count(self, now):
        repeated = _memory(now, tags=["mix", "mix", "mix", "mix", "mix"])
        single = _memory(now, tags=["mix"])
        assert compute_relevance(repeated) == compute_relevance(single)

    def test_tags_saturate_at_five(self, now):
        five = _memory(now, tags=["a", "b", "c", "d", "e"])
        ten = _memory(now, tags=[str(i) for i in range(10)])
        assert compute_relevance(five) == compute_relevance(ten)


class TestOverallQuality:
    """Combined score using the vault type profile."""

    def test_full_record_scores_high(self, full_memory):
        quality = compute_quality_score(full_memory)
        assert quality.completeness == 1.0
        assert quality.overall >= 0.8

    def test_sparse_record_scores_low(self, sparse_memory):
        assert compute_quality_score(sparse_memory).overall <= 0.3

    @pytest.mark.parametrize("vault_type", ["default", "project", "music", "journal", "unknown"])
    def test_orderings_hold_for_every_profile(self, full_memory, sparse_memory, vault_type):
        assert compute_quality_score(full_memory, vault_type).overall >= 0.8
        assert compute_quality_score(sparse_memory, vault_type).overall <= 0.3

    def test_components_in_unit_range(self, now, full_memory, sparse_memory):
        empty = _memory(now)
        for memory in (full_memory, sparse_memory, empty):
            quality = compute_quality_score(memory)
            for value in (
                quality.overall,
                quality.completeness,
                quality.accuracy,
                quality.relevance_to_command,
            ):
                assert 0.0 <= value <= 1.0

    def test_music_profile_rewards_tags(self, now):
        tagged = _memory(
            now,
            tags=["jazz", "bebop", "sax", "live", "1959"],
            summary="Listening notes",
            command="log",
        )
        default = compute_quality_score(tagged, "default").overall
        music = compute_quality_score(tagged, "music").overall
        assert music > default

    def test_project_profile_rewards_completeness(self, now):
        structured = _memory(now, **SECTIONS)
        default = compute_quality_score(structured, "default").overall
        project = compute_quality_score(structured, "project").overall
        assert project > default

    def test_unknown_type_matches_default(self, full_memory):
        assert compute_quality_score(full_memory, "totally-unknown") == compute_quality_score(
            full_memory, "default"
        )
