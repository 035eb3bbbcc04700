"""
Vault Type API Routes

Read-only access to the quality weight profiles per vault type.
"""

from typing import Dict

from fastapi import APIRouter, Depends, Query

from vaultmem.algos.mem_scoring import get_vault_type_quality_weights, infer_vault_type
from vaultmem.api.deps import get_weights_table
from vaultmem.models.dto.ranking import VaultTypeQualityWeights
from vaultmem.models.dto.ranking_responses import VaultTypeResponse


router = APIRouter(prefix="/vault-types", tags=["vault-types"])


@router.get("", response_model=Dict[str, VaultTypeQualityWeights])
async def list_vault_type_weights(
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> Dict[str, VaultTypeQualityWeights]:
    """All configured weight profiles."""
    return weights_table


@router.get("/infer", response_model=VaultTypeResponse)
async def infer_vault_type_from_context(
    context: str = Query("", description="Free-form vault context text"),
) -> VaultTypeResponse:
    """Guess the vault type from context text (music/project/journal/generic)."""
    return VaultTypeResponse(vault_type=infer_vault_type(context))


@router.get("/{vault_type}/weights", response_model=VaultTypeQualityWeights)
async def get_vault_type_weights(
    vault_type: str,
    weights_table: Dict[str, VaultTypeQualityWeights] = Depends(get_weights_table),
) -> VaultTypeQualityWeights:
    """Weight profile for a vault type; unknown types get the default profile."""
    return get_vault_type_quality_weights(vault_type, weights_table)
