"""
Vault type weight profiles.

Quality sub-scores are combined differently per vault type: structured
"project" vaults reward completeness, creative "music" vaults reward
discoverability (tags). Resolution is a single table lookup with a
guaranteed "default" entry.
"""

from typing import Dict, Mapping, Optional

from vaultmem.models.dto.ranking import VaultTypeQualityWeights

DEFAULT_VAULT_TYPE = "default"

DEFAULT_WEIGHTS = VaultTypeQualityWeights(
    completeness_weight=0.4,
    accuracy_weight=0.3,
    relevance_weight=0.3,
)

VAULT_TYPE_WEIGHTS: Dict[str, VaultTypeQualityWeights] = {
    DEFAULT_VAULT_TYPE: DEFAULT_WEIGHTS,
    "generic": DEFAULT_WEIGHTS,
    "project": VaultTypeQualityWeights(
        completeness_weight=0.5,
        accuracy_weight=0.3,
        relevance_weight=0.2,
    ),
    "music": VaultTypeQualityWeights(
        completeness_weight=0.3,
        accuracy_weight=0.25,
        relevance_weight=0.45,
    ),
    "journal": VaultTypeQualityWeights(
        completeness_weight=0.45,
        accuracy_weight=0.2,
        relevance_weight=0.35,
    ),
}

# Keyword → vault type, checked in order against free-form vault context
_VAULT_TYPE_KEYWORDS = (
    ("music", "music"),
    ("project", "project"),
    ("journal", "journal"),
)


def _normalize_key(vault_type: Optional[str]) -> str:
    return (vault_type or "").strip().lower()


def build_weights_table(
    overrides: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
) -> Dict[str, VaultTypeQualityWeights]:
    """
    Merge host-supplied profiles over the built-in table.

    Keys are normalized (trimmed, lower-cased). The "default" entry is
    always present, so resolution never needs a second fallback.
    """
    table = dict(VAULT_TYPE_WEIGHTS)
    for key, weights in (overrides or {}).items():
        table[_normalize_key(key)] = weights
    table.setdefault(DEFAULT_VAULT_TYPE, DEFAULT_WEIGHTS)
    return table


def get_vault_type_quality_weights(
    vault_type: Optional[str],
    table: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
) -> VaultTypeQualityWeights:
    """
    Resolve the weight profile for a vault type.

    Unknown types resolve to exactly the default profile.
    """
    if table is None:
        table = VAULT_TYPE_WEIGHTS
    default = table.get(DEFAULT_VAULT_TYPE, DEFAULT_WEIGHTS)
    return table.get(_normalize_key(vault_type), default)


def infer_vault_type(context: Optional[str]) -> str:
    """Guess a vault type from free-form vault context text."""
    lowered = (context or "").lower()
    for keyword, vault_type in _VAULT_TYPE_KEYWORDS:
        if keyword in lowered:
            return vault_type
    return "generic"
