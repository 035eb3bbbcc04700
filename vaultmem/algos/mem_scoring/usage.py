"""
Usage tracking algorithm.

Converts retrieval counts into a saturating usage weight, and produces
updated tracking records for each real access event.
"""

from datetime import datetime, timezone
from typing import Optional

from vaultmem.models.memories import AccessTrend, UsageTracking

USAGE_SATURATION = 10
"""Uses at which the usage weight reaches 1.0"""

INCREASING_GAP_DAYS = 1.0
DECREASING_GAP_DAYS = 30.0


def compute_usage_weight(times_used: int) -> float:
    """
    Compute usage weight from a retrieval count.

    Returns:
        0.0 for unused memories, rising linearly to 1.0 at 10+ uses

    Examples:
        - 0 uses → 0.0
        - 5 uses → 0.5
        - 25 uses → 1.0
    """
    return max(0.0, min(1.0, times_used / USAGE_SATURATION))


def compute_access_trend(
    last_used: Optional[datetime],
    now: datetime,
) -> AccessTrend:
    """
    Classify access cadence from the gap since the previous access.

    First access is stable; re-use within a day is increasing; re-use
    after a month or more of silence is decreasing.
    """
    if last_used is None:
        return AccessTrend.STABLE

    if last_used.tzinfo is None:
        last_used = last_used.replace(tzinfo=timezone.utc)

    gap_days = (now - last_used).total_seconds() / 86400
    if gap_days < INCREASING_GAP_DAYS:
        return AccessTrend.INCREASING
    if gap_days > DECREASING_GAP_DAYS:
        return AccessTrend.DECREASING
    return AccessTrend.STABLE


def update_usage_tracking(
    existing: Optional[UsageTracking] = None,
    now: Optional[datetime] = None,
) -> UsageTracking:
    """
    Record one access event.

    Returns a new UsageTracking; the existing record is left untouched so
    callers control when (and whether) the access is persisted. Call once
    per real retrieval, never speculatively.

    Args:
        existing: Current tracking, or None for a never-used memory
        now: Access time (default: now UTC)

    Returns:
        Tracking with times_used incremented, last_used set to now
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    previous_count = existing.times_used if existing is not None else 0
    previous_access = existing.last_used if existing is not None else None

    return UsageTracking(
        times_used=max(previous_count, 0) + 1,
        last_used=now,
        access_trend=compute_access_trend(previous_access, now),
    )
