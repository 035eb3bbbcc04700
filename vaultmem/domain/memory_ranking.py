"""
Memory Ranking - Domain Logic for Memory Retrieval

Selects the best memories for a node: fills in missing quality scores,
ranks, filters, and records usage of what was actually loaded.

Pattern: Sync static methods, index passed explicitly.
The scoring itself lives in vaultmem.algos.mem_scoring (pure functions);
this layer only reads candidates from the index and writes back
replaced entries.
"""

import logging
from datetime import datetime, timezone
from typing import List, Mapping, Optional, Tuple

from langsmith import traceable

from vaultmem.algos.mem_scoring import (
    ArchiveScore,
    compute_archive_score,
    compute_quality_score,
    load_top_memories,
    rank_memories,
    update_usage_tracking,
)
from vaultmem.algos.mem_scoring.recency import age_in_days
from vaultmem.domain.exceptions import DomainValidationError, EntityNotFoundError
from vaultmem.domain.memory_index import MemoryIndex, MemoryPersistence
from vaultmem.models.dto.ranking import RankingConfig, VaultTypeQualityWeights
from vaultmem.models.memories import MemoryIndexEntry, SessionMemory

logger = logging.getLogger(__name__)

NEUTRAL_QUALITY = 0.5
"""Quality assumed for unscored memories when judging archival"""


class MemoryRankingOperations:
    """
    Domain operations for memory ranking.

    Pattern: Static methods, sync operations, no hidden state.
    Callers own the index and persistence objects and pass them in.
    """

    # ═══════════════════════════════════════════════════════════════════
    # Ingest
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def save_record(
        index: MemoryIndex,
        persistence: MemoryPersistence,
        memory: SessionMemory,
        vault_type: Optional[str] = None,
        weights_table: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
    ) -> MemoryIndexEntry:
        """
        Store a full memory record and (re-)index it.

        Usage tracking and file path of an existing entry are kept. Its
        quality is dropped since the content changed; pass vault_type to
        score the new content right away.
        """
        existing = index.get_entry(memory.session_id)
        if existing is not None and existing.node_id != memory.node_id:
            raise DomainValidationError(
                f"Memory {memory.session_id} belongs to node {existing.node_id}"
            )

        persistence.save_memory(memory)
        entry = index.add_entry(MemoryIndexEntry(
            session_id=memory.session_id,
            node_id=memory.node_id,
            node_name=memory.node_name,
            timestamp=memory.timestamp,
            command=memory.command,
            summary=memory.summary,
            tags=memory.tags,
            file_path=existing.file_path if existing is not None else "",
            usage=existing.usage if existing is not None else None,
        ))
        logger.info(f"Indexed memory record {memory.session_id} for node {memory.node_id}")

        if vault_type is None:
            return entry
        return MemoryRankingOperations.ensure_quality(
            index, entry, persistence, vault_type, weights_table
        )

    # ═══════════════════════════════════════════════════════════════════
    # Quality
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def ensure_quality(
        index: MemoryIndex,
        entry: MemoryIndexEntry,
        persistence: Optional[MemoryPersistence] = None,
        vault_type: Optional[str] = "default",
        weights_table: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
        force: bool = False,
    ) -> MemoryIndexEntry:
        """
        Return the entry with a quality score, computing one if missing.

        Supplied scores are kept unless force=True. When the full record
        cannot be loaded the entry is returned unchanged (unscored memories
        still rank on recency).
        """
        if entry.quality is not None and not force:
            return entry
        if persistence is None:
            return entry

        memory = persistence.load_memory(entry.session_id, entry.node_id)
        if memory is None:
            logger.debug(f"No full record for {entry.session_id}; leaving unscored")
            return entry

        quality = compute_quality_score(memory, vault_type, weights_table)
        updated = entry.model_copy(update={"quality": quality})
        index.replace_entry(updated)
        logger.debug(
            f"Scored memory {entry.session_id}: overall={quality.overall:.2f} "
            f"(vault_type={vault_type})"
        )
        return updated

    @staticmethod
    def score_node(
        index: MemoryIndex,
        node_id: str,
        persistence: MemoryPersistence,
        vault_type: Optional[str] = "default",
        weights_table: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
        force: bool = False,
    ) -> List[MemoryIndexEntry]:
        """Compute missing (or, with force, all) quality scores for a node."""
        entries = index.query_by_node(node_id, limit=None)
        scored = [
            MemoryRankingOperations.ensure_quality(
                index, entry, persistence, vault_type, weights_table, force
            )
            for entry in entries
        ]
        logger.info(f"Scored {len(scored)} memories for node {node_id}")
        return scored

    # ═══════════════════════════════════════════════════════════════════
    # Ranking & Selection
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def get_ranked_for_node(
        index: MemoryIndex,
        node_id: str,
        config: Optional[RankingConfig] = None,
        reference_time: Optional[datetime] = None,
    ) -> List[MemoryIndexEntry]:
        """All memories of a node sorted by ranking score (no filtering)."""
        entries = index.query_by_node(node_id, limit=None)
        return rank_memories(entries, config, reference_time)

    @staticmethod
    @traceable(name="load_top_memories", tags=["ranking", "index_read"])
    def load_top_for_node(
        index: MemoryIndex,
        node_id: str,
        limit: int = 3,
        config: Optional[RankingConfig] = None,
        track_usage: bool = False,
        reference_time: Optional[datetime] = None,
    ) -> List[MemoryIndexEntry]:
        """
        Top memories of a node after quality filtering.

        With track_usage=True every returned memory counts as one access:
        its usage tracking is advanced and the new entry is written back.
        The returned entries are the updated ones.
        """
        if reference_time is None:
            reference_time = datetime.now(timezone.utc)

        entries = index.query_by_node(node_id, limit=None)
        top = load_top_memories(entries, limit, config, reference_time)
        logger.debug(f"Loaded top {len(top)} of {len(entries)} memories for node {node_id}")

        if not track_usage:
            return top

        return [
            MemoryRankingOperations._apply_usage(index, entry, reference_time)
            for entry in top
        ]

    # ═══════════════════════════════════════════════════════════════════
    # Usage Tracking
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def _apply_usage(
        index: MemoryIndex,
        entry: MemoryIndexEntry,
        now: Optional[datetime],
    ) -> MemoryIndexEntry:
        updated = entry.model_copy(update={"usage": update_usage_tracking(entry.usage, now)})
        return index.replace_entry(updated)

    @staticmethod
    def record_usage(
        index: MemoryIndex,
        session_id: str,
        node_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> MemoryIndexEntry:
        """
        Record one real access of a memory.

        Raises EntityNotFoundError if the memory is not indexed.
        """
        entry = index.get_entry(session_id, node_id)
        if entry is None:
            raise EntityNotFoundError("Memory", session_id)
        updated = MemoryRankingOperations._apply_usage(index, entry, now)
        logger.debug(f"Recorded usage for {session_id}: {updated.usage.times_used} uses")
        return updated

    # ═══════════════════════════════════════════════════════════════════
    # Archival
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def archive_candidates(
        index: MemoryIndex,
        node_id: Optional[str] = None,
        threshold: float = 0.6,
        reference_time: Optional[datetime] = None,
    ) -> List[Tuple[MemoryIndexEntry, ArchiveScore]]:
        """
        Memories whose archive score reaches the threshold, strongest first.

        Only recommends; removing memories is the persistence layer's job.
        """
        if reference_time is None:
            reference_time = datetime.now(timezone.utc)

        if node_id is None:
            entries = index.get_all_entries()
        else:
            entries = index.query_by_node(node_id, limit=None)

        candidates = []
        for entry in entries:
            quality = entry.quality.overall if entry.quality is not None else NEUTRAL_QUALITY
            times_used = entry.usage.times_used if entry.usage is not None else 0
            score = compute_archive_score(
                age_days=max(0.0, age_in_days(entry.timestamp, reference_time)),
                quality=quality,
                times_used=times_used,
            )
            if score.final_score >= threshold:
                candidates.append((entry, score))

        candidates.sort(key=lambda pair: pair[1].final_score, reverse=True)
        return candidates
