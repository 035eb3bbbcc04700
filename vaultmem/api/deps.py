"""API dependencies.

The index, session store and engine configuration are created once in the
application lifespan and stored on ``app.state``; routes receive them
through these dependencies. Tests assign ``app.state`` directly.
"""

from typing import Dict, Optional

from fastapi import Request

from vaultmem.domain.memory_index import MemoryIndex, MemoryPersistence
from vaultmem.models.dto.ranking import RankingConfig, VaultTypeQualityWeights


def get_memory_index(request: Request) -> MemoryIndex:
    """Memory index owned by the running application."""
    return request.app.state.memory_index


def get_memory_store(request: Request) -> Optional[MemoryPersistence]:
    """Full-record store, if the host configured one."""
    return getattr(request.app.state, "memory_store", None)


def get_ranking_config(request: Request) -> RankingConfig:
    """Ranking configuration validated at startup."""
    return request.app.state.ranking_config


def get_weights_table(request: Request) -> Dict[str, VaultTypeQualityWeights]:
    """Vault type weight profiles validated at startup."""
    return request.app.state.weights_table
