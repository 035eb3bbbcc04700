"""
Combined ranking algorithm.

Computes the final ranking score from all factors:
- recency: Time-based freshness (0.1-1)
- quality: Memory's overall quality (0-1, optional)
- usage: Saturating retrieval count weight (0-1)
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Dict, Optional

from vaultmem.algos.mem_scoring.recency import compute_recency_score
from vaultmem.algos.mem_scoring.usage import compute_usage_weight
from vaultmem.models.dto.ranking import DEFAULT_RANKING_CONFIG, RankingConfig
from vaultmem.models.memories import MemoryIndexEntry


@dataclass(frozen=True)
class RankingBreakdown:
    """Individual score components behind a ranking score."""

    recency: float
    quality: Optional[float]
    usage_weight: float
    base: float
    score: float

    def as_dict(self) -> Dict[str, Optional[float]]:
        return asdict(self)


def compute_ranking_breakdown(
    entry: MemoryIndexEntry,
    config: Optional[RankingConfig] = None,
    reference_time: Optional[datetime] = None,
) -> RankingBreakdown:
    """
    Compute the ranking score of a memory along with its components.

    Args:
        entry: Indexed memory (quality and usage are optional)
        config: Ranking configuration (default: DEFAULT_RANKING_CONFIG)
        reference_time: Point in time for recency (default: now UTC)

    Returns:
        RankingBreakdown whose score is in [0, 1]

    Formula:
        base  = (recency × w_r) + (quality × w_q)    if quality is known
              = recency                               otherwise
        score = base × (1 - usage_bonus) + usage_bonus × usage

    Note: usage_bonus is a reserved share of the score, so a heavily used
    memory ranks above an otherwise identical unused one even when base
    is already 1.0.
    """
    if config is None:
        config = DEFAULT_RANKING_CONFIG

    recency = compute_recency_score(entry.timestamp, config.max_age_days, reference_time)
    times_used = entry.usage.times_used if entry.usage is not None else 0
    usage_weight = compute_usage_weight(times_used)

    quality = entry.quality.overall if entry.quality is not None else None
    if quality is None:
        # Unscored memories (pre-dating quality scoring) rank on recency alone
        base = recency
    else:
        base = recency * config.recency_weight + quality * config.quality_weight
    base = max(0.0, min(1.0, base))

    score = base * (1.0 - config.usage_bonus) + config.usage_bonus * usage_weight

    return RankingBreakdown(
        recency=recency,
        quality=quality,
        usage_weight=usage_weight,
        base=base,
        score=max(0.0, min(1.0, score)),
    )


def compute_ranking_score(
    entry: MemoryIndexEntry,
    config: Optional[RankingConfig] = None,
    reference_time: Optional[datetime] = None,
) -> float:
    """Final ranking score of a memory (0-1, higher ranks first)."""
    return compute_ranking_breakdown(entry, config, reference_time).score
