"""
Memory Index - In-memory index of memory entries

Searchable view over indexed memories for cross-vault queries:
query by node, tags, command, time range; substring search; stats.

Pattern: Explicitly constructed and injected (no process-wide instance).
Entries are frozen; updates replace the whole entry by session_id.
Loading/saving the index to disk is the host's concern.
"""

import logging
import threading
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from vaultmem.algos.mem_scoring.recency import parse_timestamp
from vaultmem.domain.exceptions import DomainValidationError, EntityNotFoundError
from vaultmem.models.memories import (
    MemoryIndexEntry,
    MemoryStats,
    QueryResult,
    SessionMemory,
)

logger = logging.getLogger(__name__)


class MemoryIndex(Protocol):
    """Read/write surface the ranking operations rely on."""

    def get_all_entries(self, limit: Optional[int] = None) -> List[MemoryIndexEntry]: ...

    def query_by_node(self, node_id: str, limit: Optional[int] = 10) -> List[MemoryIndexEntry]: ...

    def query_by_tags(self, tags: Sequence[str], limit: int = 10) -> List[MemoryIndexEntry]: ...

    def search(self, query: str, limit: int = 10) -> QueryResult: ...

    def get_entry(self, session_id: str, node_id: Optional[str] = None) -> Optional[MemoryIndexEntry]: ...

    def add_entry(self, entry: MemoryIndexEntry) -> MemoryIndexEntry: ...

    def replace_entry(self, entry: MemoryIndexEntry) -> MemoryIndexEntry: ...

    def remove_entry(self, session_id: str) -> bool: ...


class MemoryPersistence(Protocol):
    """Stores full records and resolves an indexed memory to its record."""

    def save_memory(self, memory: SessionMemory) -> None: ...

    def load_memory(self, session_id: str, node_id: str) -> Optional[SessionMemory]: ...


class InMemoryMemoryIndex:
    """
    Thread-safe in-memory memory index.

    Entries are kept newest first. Adding an entry with an existing
    session_id replaces it, so re-indexing the same memory is idempotent.
    """

    def __init__(self, entries: Optional[Iterable[MemoryIndexEntry]] = None):
        self._lock = threading.Lock()
        self._entries: List[MemoryIndexEntry] = []
        for entry in entries or ():
            self._upsert(entry)
        logger.debug(f"Memory index initialized with {len(self._entries)} entries")

    # ═══════════════════════════════════════════════════════════════════
    # Writes
    # ═══════════════════════════════════════════════════════════════════

    def _upsert(self, entry: MemoryIndexEntry) -> None:
        self._entries = [e for e in self._entries if e.session_id != entry.session_id]
        self._entries.append(entry)
        # Stable sort keeps insertion order among equal timestamps
        self._entries.sort(key=lambda e: e.timestamp, reverse=True)

    def add_entry(self, entry: MemoryIndexEntry) -> MemoryIndexEntry:
        """Add (or re-index) a memory entry."""
        with self._lock:
            self._upsert(entry)
        logger.debug(f"Added memory index entry: {entry.session_id}")
        return entry

    def replace_entry(self, entry: MemoryIndexEntry) -> MemoryIndexEntry:
        """
        Replace an existing entry (usage tracking, quality recomputation).

        Raises EntityNotFoundError if no entry has this session_id.
        """
        with self._lock:
            if not any(e.session_id == entry.session_id for e in self._entries):
                raise EntityNotFoundError("Memory", entry.session_id)
            self._upsert(entry)
        return entry

    def remove_entry(self, session_id: str) -> bool:
        """Remove an entry. Returns True if something was removed."""
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.session_id != session_id]
            removed = len(self._entries) < before
        if removed:
            logger.debug(f"Removed memory index entry: {session_id}")
        return removed

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries = []
        logger.warning("Cleared all memory index entries")

    # ═══════════════════════════════════════════════════════════════════
    # Queries
    # ═══════════════════════════════════════════════════════════════════

    def _snapshot(self) -> Tuple[MemoryIndexEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def get_entry(
        self,
        session_id: str,
        node_id: Optional[str] = None,
    ) -> Optional[MemoryIndexEntry]:
        """Get entry by session_id (optionally scoped to a node). Returns None if absent."""
        for entry in self._snapshot():
            if entry.session_id == session_id and (node_id is None or entry.node_id == node_id):
                return entry
        return None

    def get_all_entries(self, limit: Optional[int] = None) -> List[MemoryIndexEntry]:
        """All entries, newest first."""
        entries = list(self._snapshot())
        return entries if limit is None else entries[:limit]

    def query_by_node(self, node_id: str, limit: Optional[int] = 10) -> List[MemoryIndexEntry]:
        """Entries belonging to a node/vault, newest first. limit=None returns all."""
        return [e for e in self._snapshot() if e.node_id == node_id][:limit]

    def query_by_tags(self, tags: Sequence[str], limit: int = 10) -> List[MemoryIndexEntry]:
        """Entries carrying at least one of the given tags."""
        wanted = set(tags)
        return [e for e in self._snapshot() if wanted.intersection(e.tags)][:limit]

    def query_by_command(self, command: str, limit: int = 10) -> List[MemoryIndexEntry]:
        """Entries whose command or summary contains the text (case-insensitive)."""
        needle = command.lower()
        return [
            e for e in self._snapshot()
            if needle in e.command.lower() or needle in e.summary.lower()
        ][:limit]

    def query_by_time_range(
        self,
        start: datetime,
        end: datetime,
        limit: int = 10,
    ) -> List[MemoryIndexEntry]:
        """Entries created within [start, end]."""
        start = parse_timestamp(start)
        end = parse_timestamp(end)
        if start > end:
            raise DomainValidationError("Time range start must not be after end")
        return [e for e in self._snapshot() if start <= e.timestamp <= end][:limit]

    def search(self, query: str, limit: int = 10) -> QueryResult:
        """Case-insensitive substring match over node name, command, summary and tags."""
        needle = query.lower()
        matching = [
            e for e in self._snapshot()
            if needle in e.node_name.lower()
            or needle in e.command.lower()
            or needle in e.summary.lower()
            or any(needle in tag.lower() for tag in e.tags)
        ][:limit]
        return QueryResult(entries=matching, total=len(matching), query=query)

    def get_stats(self, node_id: Optional[str] = None) -> MemoryStats:
        """Counts, newest/oldest timestamps and tag frequencies."""
        all_entries = self._snapshot()
        entries = [e for e in all_entries if node_id is None or e.node_id == node_id]

        tag_counts: Counter = Counter()
        for entry in entries:
            tag_counts.update(entry.tags)

        return MemoryStats(
            total_sessions=len(all_entries),
            total_memories=len(entries),
            newest_memory=entries[0].timestamp if entries else None,
            oldest_memory=entries[-1].timestamp if entries else None,
            tag_counts=dict(tag_counts),
        )

    def get_index_stats(self) -> Dict[str, Optional[object]]:
        """Size summary of the index itself."""
        entries = self._snapshot()
        return {
            "total_entries": len(entries),
            "newest_entry": entries[0].session_id if entries else None,
        }

    def __len__(self) -> int:
        return len(self._snapshot())


class InMemorySessionStore:
    """Dict-backed MemoryPersistence keyed by (session_id, node_id)."""

    def __init__(self, memories: Optional[Iterable[SessionMemory]] = None):
        self._memories: Dict[Tuple[str, str], SessionMemory] = {}
        for memory in memories or ():
            self.save_memory(memory)

    def save_memory(self, memory: SessionMemory) -> None:
        """Store (or overwrite) a full memory record."""
        self._memories[(memory.session_id, memory.node_id)] = memory

    def load_memory(self, session_id: str, node_id: str) -> Optional[SessionMemory]:
        """Full record for an indexed memory, or None if unknown."""
        return self._memories.get((session_id, node_id))
