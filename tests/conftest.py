"""
Pytest configuration and fixtures for testing.

Scoring depends on "now", so tests pass an explicit reference time
(the `now` fixture) instead of relying on the wall clock.
"""
import pytest
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from vaultmem.models.memories import (
    MemoryIndexEntry,
    QualityScore,
    SessionMemory,
    UsageTracking,
)


NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time shared by a test."""
    return NOW


def quality_of(overall: float) -> QualityScore:
    """Quality score with every component equal to `overall`."""
    return QualityScore(
        overall=overall,
        completeness=overall,
        accuracy=overall,
        relevance_to_command=overall,
    )


def build_entry(
    session_id: str = "s-1",
    node_id: str = "music-vault",
    age: timedelta = timedelta(hours=1),
    quality: Optional[float] = None,
    times_used: Optional[int] = None,
    tags: Sequence[str] = ("music",),
    command: str = "analyze-track",
    summary: str = "Analyzed the track structure",
    reference_time: datetime = NOW,
) -> MemoryIndexEntry:
    """Index entry created `age` before `reference_time`."""
    return MemoryIndexEntry(
        session_id=session_id,
        node_id=node_id,
        node_name=node_id.replace("-", " ").title(),
        timestamp=reference_time - age,
        command=command,
        summary=summary,
        tags=tags,
        file_path=f"/sessions/{node_id}/{session_id}/memory.md",
        quality=quality_of(quality) if quality is not None else None,
        usage=UsageTracking(times_used=times_used) if times_used is not None else None,
    )


@pytest.fixture
def make_entry():
    """Factory fixture for MemoryIndexEntry."""
    return build_entry


@pytest.fixture
def make_quality():
    """Factory fixture for uniform QualityScore."""
    return quality_of


@pytest.fixture
def full_memory() -> SessionMemory:
    """Session memory with every section filled and a documented resolution."""
    return SessionMemory(
        session_id="s-full",
        node_id="project-vault",
        node_name="Project Vault",
        timestamp=NOW - timedelta(days=2),
        command="run-migration --target staging",
        summary=(
            "Migrated the staging database to the new schema, fixed the failing "
            "index rebuild and documented the rollback procedure for production."
        ),
        tags=["database", "migration", "staging", "schema", "rollback"],
        title="Staging schema migration",
        current_state="Staging runs on schema v42",
        task_spec="Migrate staging to v42 without downtime",
        workflow="1. Snapshot\n2. Apply migration\n3. Rebuild indexes",
        errors="Index rebuild timed out on the events table",
        learnings="Raising the statement timeout resolved the rebuild failure",
        key_results="Migration completed successfully in 14 minutes",
    )


@pytest.fixture
def sparse_memory() -> SessionMemory:
    """Session memory with almost nothing recorded."""
    return SessionMemory(
        session_id="s-sparse",
        node_id="project-vault",
        node_name="Project Vault",
        timestamp=NOW - timedelta(days=2),
        command="x",
        summary="",
        tags=[],
        title="Untitled",
    )
