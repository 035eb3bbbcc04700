# Data Transfer Objects (DTOs)
# Configuration and request/response models

from vaultmem.models.dto.ranking import (
    DEFAULT_RANKING_CONFIG,
    RankingConfig,
    VaultTypeQualityWeights,
)
from vaultmem.models.dto.ranking_responses import (
    ArchiveCandidateResponse,
    MemoryContextResponse,
    QualityRequest,
    QualityResponse,
    RankedMemoriesResponse,
    ScoredMemoryResponse,
    VaultTypeResponse,
)

__all__ = [
    "DEFAULT_RANKING_CONFIG",
    "RankingConfig",
    "VaultTypeQualityWeights",
    "ArchiveCandidateResponse",
    "MemoryContextResponse",
    "QualityRequest",
    "QualityResponse",
    "RankedMemoriesResponse",
    "ScoredMemoryResponse",
    "VaultTypeResponse",
]
