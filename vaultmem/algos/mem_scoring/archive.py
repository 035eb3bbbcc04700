"""
Archive score algorithm.

Scores how strongly a memory is a candidate for archival: old, low
quality and unused memories score high. The score is a recommendation
only; archiving itself belongs to the persistence layer.

Score ranges from 0.0 (keep) to 1.0 (archive).
"""

from dataclasses import dataclass

AGE_SATURATION_DAYS = 90.0
AGE_WEIGHT = 0.25
QUALITY_WEIGHT = 0.35
USAGE_WEIGHT = 0.40
ARCHIVE_THRESHOLD = 0.6

OLD_AFTER_DAYS = 60
LOW_QUALITY_BELOW = 0.5


@dataclass(frozen=True)
class ArchiveScore:
    """Archive recommendation with its components."""

    age_score: float
    quality_score: float
    usage_score: float
    final_score: float
    should_archive: bool
    reason: str


def describe_archive_reason(age_days: float, quality: float, times_used: int) -> str:
    """Human-readable reason for an archive recommendation."""
    reasons = []
    if age_days > OLD_AFTER_DAYS:
        reasons.append("old")
    if quality < LOW_QUALITY_BELOW:
        reasons.append("low quality")
    if times_used <= 0:
        reasons.append("unused")
    return ", ".join(reasons) if reasons else "candidate for review"


def compute_archive_score(
    age_days: float,
    quality: float,
    times_used: int,
    threshold: float = ARCHIVE_THRESHOLD,
) -> ArchiveScore:
    """
    Compute archive score for a memory.

    Args:
        age_days: Memory age in days
        quality: Overall quality (0-1)
        times_used: Retrieval count
        threshold: Final score above which archival is recommended

    Returns:
        ArchiveScore with all components in [0, 1]

    Formula:
        final = age × 0.25 + (1 - quality) × 0.35 + (1 - usage) × 0.40
        where age saturates at 90 days and usage at 10 uses.
    """
    age_score = max(0.0, min(1.0, age_days / AGE_SATURATION_DAYS))
    quality_score = 1.0 - max(0.0, min(1.0, quality))
    usage_score = max(0.0, min(1.0, 1.0 - times_used / 10))

    final_score = (
        age_score * AGE_WEIGHT
        + quality_score * QUALITY_WEIGHT
        + usage_score * USAGE_WEIGHT
    )
    final_score = max(0.0, min(1.0, final_score))

    return ArchiveScore(
        age_score=age_score,
        quality_score=quality_score,
        usage_score=usage_score,
        final_score=final_score,
        should_archive=final_score > threshold,
        reason=describe_archive_reason(age_days, quality, times_used),
    )
