"""Memory records - indexed entries and full session memories.

All models are frozen: scoring and usage tracking produce new instances
via ``model_copy(update=...)`` rather than mutating records in place.
Field names are snake_case and output is always snake_case; camelCase
names from the on-disk index (``sessionId``, ``timesUsed``, ...) are
accepted on input only.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_RECORD_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=AliasGenerator(validation_alias=to_camel),
    extra="ignore",
)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _unique_tags(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    seen = []
    for tag in value:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)


class AccessTrend(str, Enum):
    """Coarse direction of a memory's access cadence."""
    STABLE = "stable"
    INCREASING = "increasing"
    DECREASING = "decreasing"


class QualityScore(BaseModel):
    """Quality estimate for a memory. Every component is in [0, 1]."""
    model_config = _RECORD_CONFIG

    overall: float = Field(description="Weighted combination of the three components")
    completeness: float = Field(description="Share of memory sections that are filled in")
    accuracy: float = Field(description="Confidence that the recorded outcome is trustworthy")
    relevance_to_command: float = Field(description="How discoverable the memory is for its command")

    @field_validator("overall", "completeness", "accuracy", "relevance_to_command", mode="before")
    @classmethod
    def _clamp_unit(cls, value: Any) -> float:
        return max(0.0, min(1.0, float(value)))


class UsageTracking(BaseModel):
    """How often and how recently a memory was used in retrieval."""
    model_config = _RECORD_CONFIG

    times_used: int = Field(default=0, description="Number of retrievals (never negative)")
    last_used: Optional[datetime] = Field(default=None, description="Time of the latest retrieval")
    access_trend: AccessTrend = Field(default=AccessTrend.STABLE)

    @field_validator("times_used", mode="before")
    @classmethod
    def _clamp_count(cls, value: Any) -> int:
        return max(0, int(value or 0))

    @field_validator("last_used")
    @classmethod
    def _utc_last_used(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class MemoryIndexEntry(BaseModel):
    """Lightweight indexed view of one memory."""
    model_config = _RECORD_CONFIG

    session_id: str = Field(min_length=1)
    node_id: str = Field(min_length=1)
    node_name: str = Field(min_length=1)
    timestamp: datetime = Field(description="Creation time (immutable)")
    command: str = ""
    summary: str = ""
    tags: Tuple[str, ...] = ()
    file_path: str = ""
    quality: Optional[QualityScore] = None
    usage: Optional[UsageTracking] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> Tuple[str, ...]:
        return _unique_tags(value)

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class SessionMemory(BaseModel):
    """Full memory record, used to compute quality when none is stored."""
    model_config = _RECORD_CONFIG

    session_id: str = Field(min_length=1)
    node_id: str = Field(min_length=1)
    node_name: str = Field(min_length=1)
    timestamp: datetime
    command: str = ""
    summary: str = ""
    tags: Tuple[str, ...] = ()
    duration_minutes: float = 0
    ai_provider: str = "unknown"

    # Free-text sections
    title: Optional[str] = None
    current_state: Optional[str] = None
    task_spec: Optional[str] = None
    workflow: Optional[str] = None
    errors: Optional[str] = None
    learnings: Optional[str] = None
    key_results: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> Tuple[str, ...]:
        return _unique_tags(value)

    @field_validator("timestamp")
    @classmethod
    def _utc_timestamp(cls, value: datetime) -> datetime:
        return ensure_utc(value)


SECTION_FIELDS: Tuple[str, ...] = (
    "title",
    "current_state",
    "task_spec",
    "workflow",
    "errors",
    "learnings",
    "key_results",
)
"""The seven free-text sections counted for completeness."""


class MemoryStats(BaseModel):
    """Aggregate counts over indexed memories."""
    total_sessions: int
    total_memories: int
    newest_memory: Optional[datetime] = None
    oldest_memory: Optional[datetime] = None
    tag_counts: dict[str, int] = Field(default_factory=dict)


class QueryResult(BaseModel):
    """Search result envelope returned by the memory index."""
    entries: list[MemoryIndexEntry]
    total: int
    query: str
