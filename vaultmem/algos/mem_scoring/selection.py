"""
Quality filtering and top-N selection.

Pure list transformations over indexed memories: filter by minimum
quality, rank by combined score, truncate.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from vaultmem.algos.mem_scoring.combined import compute_ranking_score
from vaultmem.models.dto.ranking import DEFAULT_RANKING_CONFIG, RankingConfig
from vaultmem.models.memories import MemoryIndexEntry


def filter_by_quality(
    entries: Sequence[MemoryIndexEntry],
    min_quality: Optional[float] = DEFAULT_RANKING_CONFIG.min_quality_score,
) -> List[MemoryIndexEntry]:
    """
    Drop memories whose known quality is below min_quality.

    Memories without quality data are always kept. A threshold of None
    (or <= 0) disables filtering and returns every entry in order.
    """
    if min_quality is None or min_quality <= 0:
        return list(entries)

    return [
        entry
        for entry in entries
        if entry.quality is None or entry.quality.overall >= min_quality
    ]


def score_memories(
    entries: Sequence[MemoryIndexEntry],
    config: Optional[RankingConfig] = None,
    reference_time: Optional[datetime] = None,
) -> List[Tuple[MemoryIndexEntry, float]]:
    """
    Rank memories and keep their scores.

    One reference time is shared by the whole call so every entry is
    scored against the same "now". The sort is stable: equal scores keep
    their input order.
    """
    if reference_time is None:
        reference_time = datetime.now(timezone.utc)

    scored = [
        (entry, compute_ranking_score(entry, config, reference_time))
        for entry in entries
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def rank_memories(
    entries: Sequence[MemoryIndexEntry],
    config: Optional[RankingConfig] = None,
    reference_time: Optional[datetime] = None,
) -> List[MemoryIndexEntry]:
    """Sort memories by ranking score, highest first."""
    return [entry for entry, _ in score_memories(entries, config, reference_time)]


def load_top_memories(
    entries: Sequence[MemoryIndexEntry],
    limit: int = 3,
    config: Optional[RankingConfig] = None,
    reference_time: Optional[datetime] = None,
) -> List[MemoryIndexEntry]:
    """
    Filter by quality, rank, and return at most `limit` memories.

    Returns fewer than `limit` when not enough memories pass the filter.
    """
    if limit <= 0:
        return []
    if config is None:
        config = DEFAULT_RANKING_CONFIG

    filtered = filter_by_quality(entries, config.min_quality_score)
    return rank_memories(filtered, config, reference_time)[:limit]
