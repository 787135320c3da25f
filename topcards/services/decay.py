"""
Time-decay weighting.

A decklist's weight halves every `half_life_days` days:

    weight = 0.5 ** (age_days / half_life_days)

so an event today weighs 1.0 and one a half-life ago weighs 0.5. Decklists
older than `max_age_days`, or with no usable date, weigh 0.0 and are left
out of the totals entirely.
"""

import math
from datetime import date

from topcards.models.decklist import DecklistRecord
from topcards.models.run_config import RunConfig


def age_in_days(event_date: date, now: date) -> int:
    """Days between the event and `now`. Future events count as age 0."""
    return max((now - event_date).days, 0)


def decay_weight(
    event_date: date | None,
    now: date,
    half_life_days: float,
    max_age_days: float,
    weighting_enabled: bool = True,
) -> float:
    """
    Weight of a decklist from the given event date.

    Args:
        event_date: Date of the event, None if unknown
        now: Reference date for the run
        half_life_days: Days for the weight to halve (must be positive)
        max_age_days: Events older than this weigh 0.0
        weighting_enabled: When False, surviving events weigh exactly 1.0

    Returns:
        Weight in [0.0, 1.0]

    Raises:
        ValueError: If half_life_days is not a positive finite number, or
            max_age_days is NaN
    """
    if not math.isfinite(half_life_days) or half_life_days <= 0:
        raise ValueError(f"half_life_days must be positive, got {half_life_days}")
    if math.isnan(max_age_days):
        raise ValueError("max_age_days must be a number, got nan")

    # Undated lists are treated as infinitely old
    if event_date is None:
        return 0.0

    age = age_in_days(event_date, now)
    if age > max_age_days:
        return 0.0

    if not weighting_enabled:
        return 1.0

    return 0.5 ** (age / half_life_days)


def record_weight(record: DecklistRecord, config: RunConfig) -> float:
    """Weight of a record under a run config."""
    return decay_weight(
        record.event_date,
        config.now,
        config.half_life_days,
        config.max_age_days,
        config.weighting_enabled,
    )
