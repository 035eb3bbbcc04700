"""
Ranking request/response DTOs for the memories API.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from vaultmem.models.memories import MemoryIndexEntry, QualityScore


class ScoredMemoryResponse(BaseModel):
    """Indexed memory with its ranking score."""

    memory: MemoryIndexEntry
    score: float = Field(description="Combined ranking score (0-1)")
    score_breakdown: Optional[Dict[str, Optional[float]]] = Field(
        default=None, description="Individual score components"
    )


class RankedMemoriesResponse(BaseModel):
    """Ranked memories for a node."""

    node_id: str
    count: int
    memories: List[ScoredMemoryResponse]


class MemoryContextResponse(BaseModel):
    """Top memories rendered as an injectable context block."""

    node_id: str
    count: int
    context: str
    summary: str


class QualityRequest(BaseModel):
    """Markdown body of an indexed memory, to be scored."""

    content: str = Field(description="memory.md content")
    vault_type: str = Field(default="default", description="Selects the quality weight profile")


class QualityResponse(BaseModel):
    """Heuristic quality for a memory."""

    vault_type: str
    quality: QualityScore


class ArchiveCandidateResponse(BaseModel):
    """Memory recommended for archival."""

    memory: MemoryIndexEntry
    final_score: float
    age_score: float
    quality_score: float
    usage_score: float
    reason: str


class VaultTypeResponse(BaseModel):
    """Resolved vault type from free-form context."""

    vault_type: str
