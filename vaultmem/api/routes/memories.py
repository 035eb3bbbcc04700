"""
Memory API Routes

REST endpoints for memory ingest, queries, ranking and usage tracking.
All routes are thin HTTP adapters - business logic in
MemoryRankingOperations and the mem_scoring algorithms.

Pattern: Async routes + Sync domain operations.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from vaultmem.algos.mem_scoring import (
    compute_quality_score,
    compute_ranking_breakdown,
)
from vaultmem.api.deps import (
    get_memory_index,
    get_memory_store,
    get_ranking_config,
    get_weights_table,
)
from vaultmem.domain.exceptions import DomainValidationError, EntityNotFoundError
from vaultmem.domain.memory_index import MemoryIndex, MemoryPersistence
from vaultmem.domain.memory_ranking import MemoryRankingOperations
from vaultmem.models.dto.ranking import RankingConfig, VaultTypeQualityWeights
from vaultmem.models.dto.ranking_responses import (
    ArchiveCandidateResponse,
    MemoryContextResponse,
    QualityRequest,
    QualityResponse,
    RankedMemoriesResponse,
    ScoredMemoryResponse,
)
from vaultmem.models.memories import MemoryIndexEntry, MemoryStats, SessionMemory
from vaultmem.utils.memory_context import (
    format_memory_entry,
    format_memory_summary,
    inject_memories_into_context,
    session_memory_from_markdown,
)


router = APIRouter(prefix="/memories", tags=["memories"])


def _scored(
    entries: List[MemoryIndexEntry],
    config: RankingConfig,
    now: datetime,
) -> List[ScoredMemoryResponse]:
    responses = []
    for entry in entries:
        breakdown = compute_ranking_breakdown(entry, config, now)
        responses.append(ScoredMemoryResponse(
            memory=entry,
            score=breakdown.score,
            score_breakdown=breakdown.as_dict(),
        ))
    return responses


# ═══════════════════════════════════════════════════════════════════
# Ingest
# ═══════════════════════════════════════════════════════════════════

@router.post("", response_model=MemoryIndexEntry, status_code=status.HTTP_201_CREATED)
async def index_memory(
    entry: MemoryIndexEntry,
    index: MemoryIndex = Depends(get_memory_index),
) -> MemoryIndexEntry:
    """Add an index entry. Posting an existing session_id re-indexes it."""
    return index.add_entry(entry)


@router.put("/{session_id}/record", response_model=MemoryIndexEntry)
async def save_memory_record(
    session_id: str,
    memory: SessionMemory,
    vault_type: Optional[str] = None,
    index: MemoryIndex = Depends(get_memory_index),
    store: Optional[MemoryPersistence] = Depends(get_memory_store),
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> MemoryIndexEntry:
    """
    Store a full memory record and index it.

    With vault_type set the record is scored immediately.

    Raises:
        400: Path and body session_id differ, node mismatch, or no store configured
    """
    if memory.session_id != session_id:
        raise DomainValidationError(
            f"Path session_id {session_id} does not match body session_id {memory.session_id}"
        )
    if store is None:
        raise DomainValidationError("No session store configured")
    return MemoryRankingOperations.save_record(index, store, memory, vault_type, weights_table)


# ═══════════════════════════════════════════════════════════════════
# Queries
# ═══════════════════════════════════════════════════════════════════

@router.get("", response_model=List[MemoryIndexEntry])
async def list_memories(
    node_id: Optional[str] = None,
    limit: int = Query(50, ge=1, le=1000, description="Max results (1-1000)"),
    index: MemoryIndex = Depends(get_memory_index),
) -> List[MemoryIndexEntry]:
    """List memories, newest first, optionally for one node."""
    if node_id:
        return index.query_by_node(node_id, limit)
    return index.get_all_entries(limit)


@router.get("/search", response_model=List[MemoryIndexEntry])
async def search_memories(
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(20, ge=1, le=200, description="Max results (1-200)"),
    index: MemoryIndex = Depends(get_memory_index),
) -> List[MemoryIndexEntry]:
    """Case-insensitive substring search over node name, command, summary and tags."""
    return index.search(q, limit).entries


@router.get("/stats", response_model=MemoryStats)
async def get_memory_stats(
    node_id: Optional[str] = None,
    index: MemoryIndex = Depends(get_memory_index),
) -> MemoryStats:
    """Memory counts and tag frequencies."""
    return index.get_stats(node_id)


# ═══════════════════════════════════════════════════════════════════
# Ranking
# ═══════════════════════════════════════════════════════════════════

@router.get("/ranked", response_model=RankedMemoriesResponse)
async def get_ranked_memories(
    node_id: str,
    index: MemoryIndex = Depends(get_memory_index),
    config: RankingConfig = Depends(get_ranking_config),
) -> RankedMemoriesResponse:
    """All memories of a node sorted by ranking score (unfiltered)."""
    now = datetime.now(timezone.utc)
    ranked = MemoryRankingOperations.get_ranked_for_node(index, node_id, config, now)
    return RankedMemoriesResponse(
        node_id=node_id,
        count=len(ranked),
        memories=_scored(ranked, config, now),
    )


@router.get("/top", response_model=RankedMemoriesResponse)
async def get_top_memories(
    node_id: str,
    limit: int = Query(3, ge=1, le=50, description="Max memories (1-50)"),
    min_quality: Optional[float] = Query(
        None, ge=0.0, le=1.0, description="Override minimum quality (0 disables filtering)"
    ),
    track_usage: bool = False,
    index: MemoryIndex = Depends(get_memory_index),
    config: RankingConfig = Depends(get_ranking_config),
) -> RankedMemoriesResponse:
    """
    Best memories of a node after quality filtering.

    With track_usage=true each returned memory counts as one access.
    """
    if min_quality is not None:
        config = config.model_copy(update={"min_quality_score": min_quality})

    now = datetime.now(timezone.utc)
    top = MemoryRankingOperations.load_top_for_node(
        index, node_id, limit, config, track_usage=track_usage, reference_time=now
    )
    return RankedMemoriesResponse(
        node_id=node_id,
        count=len(top),
        memories=_scored(top, config, now),
    )


@router.get("/context", response_model=MemoryContextResponse)
async def get_memory_context(
    node_id: str,
    limit: int = Query(3, ge=1, le=20, description="Max memories (1-20)"),
    base_context: str = "",
    track_usage: bool = False,
    index: MemoryIndex = Depends(get_memory_index),
    config: RankingConfig = Depends(get_ranking_config),
) -> MemoryContextResponse:
    """
    Top memories rendered as a context block for a new session.

    With track_usage=true each injected memory counts as one access.
    """
    top = MemoryRankingOperations.load_top_for_node(
        index, node_id, limit, config, track_usage=track_usage
    )
    rendered = [format_memory_entry(entry) for entry in top]
    return MemoryContextResponse(
        node_id=node_id,
        count=len(top),
        context=inject_memories_into_context(base_context, rendered),
        summary=format_memory_summary(len(top)),
    )


@router.get("/archive-candidates", response_model=List[ArchiveCandidateResponse])
async def get_archive_candidates(
    node_id: Optional[str] = None,
    threshold: float = Query(0.6, ge=0.0, le=1.0, description="Minimum archive score"),
    index: MemoryIndex = Depends(get_memory_index),
) -> List[ArchiveCandidateResponse]:
    """Memories recommended for archival, strongest candidates first."""
    candidates = MemoryRankingOperations.archive_candidates(index, node_id, threshold)
    return [
        ArchiveCandidateResponse(
            memory=entry,
            final_score=score.final_score,
            age_score=score.age_score,
            quality_score=score.quality_score,
            usage_score=score.usage_score,
            reason=score.reason,
        )
        for entry, score in candidates
    ]


@router.post("/quality", response_model=QualityResponse)
async def score_session_memory(
    memory: SessionMemory,
    vault_type: str = "default",
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> QualityResponse:
    """Heuristic quality for a full memory record (nothing is stored)."""
    quality = compute_quality_score(memory, vault_type, weights_table)
    return QualityResponse(vault_type=vault_type, quality=quality)


# ═══════════════════════════════════════════════════════════════════
# Single Memory
# ═══════════════════════════════════════════════════════════════════

@router.get("/{session_id}", response_model=MemoryIndexEntry)
async def get_memory(
    session_id: str,
    node_id: Optional[str] = None,
    index: MemoryIndex = Depends(get_memory_index),
) -> MemoryIndexEntry:
    """
    Get one indexed memory.

    Raises:
        404: Memory not indexed
    """
    entry = index.get_entry(session_id, node_id)
    if entry is None:
        raise EntityNotFoundError("Memory", session_id)
    return entry


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_memory(
    session_id: str,
    index: MemoryIndex = Depends(get_memory_index),
) -> None:
    """
    Remove a memory from the index.

    Raises:
        404: Memory not indexed
    """
    if not index.remove_entry(session_id):
        raise EntityNotFoundError("Memory", session_id)


@router.post("/{session_id}/usage", response_model=MemoryIndexEntry)
async def record_memory_usage(
    session_id: str,
    node_id: Optional[str] = None,
    index: MemoryIndex = Depends(get_memory_index),
) -> MemoryIndexEntry:
    """
    Record one access of a memory.

    Raises:
        404: Memory not indexed
    """
    return MemoryRankingOperations.record_usage(index, session_id, node_id)


@router.post("/{session_id}/quality", response_model=QualityResponse)
async def score_memory_quality(
    session_id: str,
    data: QualityRequest,
    index: MemoryIndex = Depends(get_memory_index),
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> QualityResponse:
    """
    Compute heuristic quality from a memory's markdown and store it on the entry.

    Raises:
        404: Memory not indexed
    """
    entry = index.get_entry(session_id)
    if entry is None:
        raise EntityNotFoundError("Memory", session_id)

    memory = session_memory_from_markdown(entry, data.content)
    quality = compute_quality_score(memory, data.vault_type, weights_table)
    index.replace_entry(entry.model_copy(update={"quality": quality}))
    return QualityResponse(vault_type=data.vault_type, quality=quality)


@router.post("/nodes/{node_id}/score", response_model=List[MemoryIndexEntry])
async def score_node_memories(
    node_id: str,
    vault_type: str = "default",
    force: bool = False,
    index: MemoryIndex = Depends(get_memory_index),
    store: Optional[MemoryPersistence] = Depends(get_memory_store),
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> List[MemoryIndexEntry]:
    """
    Fill in missing quality scores for a node from the configured store.

    Entries without a stored full record stay unscored.
    """
    if store is None:
        return index.query_by_node(node_id, limit=None)
    return MemoryRankingOperations.score_node(
        index, node_id, store, vault_type, weights_table, force
    )
