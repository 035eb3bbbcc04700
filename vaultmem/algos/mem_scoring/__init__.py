# Memory scoring algorithms
# Pure functions for computing quality, usage and ranking scores

from vaultmem.algos.mem_scoring.recency import compute_recency_score
from vaultmem.algos.mem_scoring.usage import compute_usage_weight, update_usage_tracking
from vaultmem.algos.mem_scoring.weights import (
    get_vault_type_quality_weights,
    build_weights_table,
    infer_vault_type,
)
from vaultmem.algos.mem_scoring.quality import compute_quality_score
from vaultmem.algos.mem_scoring.combined import (
    RankingBreakdown,
    compute_ranking_breakdown,
    compute_ranking_score,
)
from vaultmem.algos.mem_scoring.selection import (
    filter_by_quality,
    rank_memories,
    score_memories,
    load_top_memories,
)
from vaultmem.algos.mem_scoring.archive import ArchiveScore, compute_archive_score

__all__ = [
    "compute_recency_score",
    "compute_usage_weight",
    "update_usage_tracking",
    "get_vault_type_quality_weights",
    "build_weights_table",
    "infer_vault_type",
    "compute_quality_score",
    "RankingBreakdown",
    "compute_ranking_breakdown",
    "compute_ranking_score",
    "filter_by_quality",
    "rank_memories",
    "score_memories",
    "load_top_memories",
    "ArchiveScore",
    "compute_archive_score",
]
