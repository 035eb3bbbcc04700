"""
Recency score algorithm.

Computes how "fresh" a memory is using linear decay with a floor.
Score ranges from 1.0 (created within the last day) to 0.1 (at or beyond
max_age_days). The floor keeps old but otherwise excellent memories
retrievable.
"""

from datetime import datetime, timezone
from typing import Optional, Union

FRESH_WINDOW_DAYS = 1.0
RECENCY_FLOOR = 0.1


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 string (or pass through a datetime), assuming UTC when naive."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def age_in_days(
    timestamp: Union[str, datetime],
    reference_time: Optional[datetime] = None,
) -> float:
    """Days elapsed between timestamp and reference_time (negative for future timestamps)."""
    if reference_time is None:
        reference_time = datetime.now(timezone.utc)
    reference_time = parse_timestamp(reference_time)
    return (reference_time - parse_timestamp(timestamp)).total_seconds() / 86400


def compute_recency_score(
    timestamp: Union[str, datetime],
    max_age_days: float = 365,
    reference_time: Optional[datetime] = None,
) -> float:
    """
    Compute recency score using linear decay.

    Args:
        timestamp: When the memory was created (ISO string or datetime)
        max_age_days: Age at which the score reaches its floor
        reference_time: Point in time to compute from (default: now UTC)

    Returns:
        Score from 0.1 (old) to 1.0 (within the last day)

    Examples:
        - timestamp = 2 hours ago → 1.0
        - timestamp = 183 days ago (max_age_days=365) → 0.55
        - timestamp = 400 days ago (max_age_days=365) → 0.1
    """
    age_days = age_in_days(timestamp, reference_time)

    # Max age wins over the fresh window when max_age_days < 1
    if age_days >= max_age_days:
        return RECENCY_FLOOR

    # Future timestamps and the first day get max score
    if age_days <= FRESH_WINDOW_DAYS:
        return 1.0

    # Linear decay from 1.0 at one day to the floor at max_age_days
    span = max_age_days - FRESH_WINDOW_DAYS
    score = 1.0 - ((age_days - FRESH_WINDOW_DAYS) / span) * (1.0 - RECENCY_FLOOR)

    return max(RECENCY_FLOOR, min(1.0, score))
