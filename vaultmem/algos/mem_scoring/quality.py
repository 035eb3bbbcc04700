"""
Heuristic quality scoring.

Estimates a memory's quality from its text when no supplied score exists:
- completeness: share of the seven sections that are filled in (0-1)
- accuracy: confidence the recorded outcome is trustworthy (0-1)
- relevance: tag richness, summary detail, command specificity (0-1)
- overall: weighted by the vault type's profile
"""

import re
from typing import Mapping, Optional

from vaultmem.algos.mem_scoring.weights import get_vault_type_quality_weights
from vaultmem.models.dto.ranking import VaultTypeQualityWeights
from vaultmem.models.memories import SECTION_FIELDS, QualityScore, SessionMemory

ACCURACY_BASE = 0.5
ERROR_TRACKING_BONUS = 0.15
RESOLUTION_BONUS = 0.2
RESOLUTION_ONLY_BONUS = 0.1

TAG_WEIGHT = 0.4
SUMMARY_WEIGHT = 0.3
COMMAND_WEIGHT = 0.3

TAG_SATURATION = 5
SUMMARY_SATURATION_CHARS = 100
COMMAND_SATURATION_CHARS = 20

RESOLUTION_PATTERN = re.compile(
    r"\b(resolved|fixed|fixes|completed?|success(ful(ly)?)?|succeeded|solved|"
    r"passe[sd]|passing|works|working|done|finished|shipped)\b",
    re.IGNORECASE,
)


def _filled(text: Optional[str]) -> bool:
    return bool(text and text.strip())


def _saturate(value: float, ceiling: float) -> float:
    return max(0.0, min(1.0, value / ceiling))


def compute_completeness(memory: SessionMemory) -> float:
    """Fraction of the seven text sections that are non-empty."""
    filled = sum(1 for field in SECTION_FIELDS if _filled(getattr(memory, field)))
    return filled / len(SECTION_FIELDS)


def has_resolution_evidence(memory: SessionMemory) -> bool:
    """True when learnings or key results describe a completed/successful outcome."""
    for text in (memory.learnings, memory.key_results):
        if _filled(text) and RESOLUTION_PATTERN.search(text):
            return True
    return False


def compute_accuracy(memory: SessionMemory) -> float:
    """
    Confidence that the recorded outcome is trustworthy.

    Examples:
        - nothing recorded → 0.5
        - errors tracked → 0.65
        - errors tracked and resolution documented → 0.85
        - resolution documented without error tracking → 0.6
    """
    errors_tracked = _filled(memory.errors)
    resolved = has_resolution_evidence(memory)

    score = ACCURACY_BASE
    if errors_tracked:
        score += ERROR_TRACKING_BONUS
        if resolved:
            score += RESOLUTION_BONUS
    elif resolved:
        score += RESOLUTION_ONLY_BONUS

    return max(0.0, min(1.0, score))


def compute_relevance(memory: SessionMemory) -> float:
    """
    Relevance to the command that produced the memory.

    Formula: tags × 0.4 + summary × 0.3 + command × 0.3, each saturating
    (5 tags, 100 summary chars, 20 command chars).
    """
    tag_score = _saturate(len(memory.tags), TAG_SATURATION)
    summary_score = _saturate(len((memory.summary or "").strip()), SUMMARY_SATURATION_CHARS)
    command_score = _saturate(len((memory.command or "").strip()), COMMAND_SATURATION_CHARS)

    score = (
        tag_score * TAG_WEIGHT
        + summary_score * SUMMARY_WEIGHT
        + command_score * COMMAND_WEIGHT
    )
    return max(0.0, min(1.0, score))


def combine_quality(
    completeness: float,
    accuracy: float,
    relevance: float,
    weights: VaultTypeQualityWeights,
) -> float:
    """Weighted overall quality, clamped to [0, 1]."""
    overall = (
        completeness * weights.completeness_weight
        + accuracy * weights.accuracy_weight
        + relevance * weights.relevance_weight
    )
    return max(0.0, min(1.0, overall))


def compute_quality_score(
    memory: SessionMemory,
    vault_type: Optional[str] = "default",
    weights_table: Optional[Mapping[str, VaultTypeQualityWeights]] = None,
) -> QualityScore:
    """
    Auto-calculate a quality score for a memory from its content.

    Args:
        memory: Full session memory with its text sections
        vault_type: Selects the weight profile (unknown → default)
        weights_table: Optional host-supplied profile table

    Returns:
        QualityScore with all four components in [0, 1]
    """
    completeness = compute_completeness(memory)
    accuracy = compute_accuracy(memory)
    relevance = compute_relevance(memory)
    weights = get_vault_type_quality_weights(vault_type, weights_table)

    return QualityScore(
        overall=combine_quality(completeness, accuracy, relevance, weights),
        completeness=completeness,
        accuracy=accuracy,
        relevance_to_command=relevance,
    )
