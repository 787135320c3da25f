"""
RunConfig: immutable parameters for one aggregation run.

The reference date is captured once when the config is built and reused for
every record, so a run over many files never drifts across midnight.
"""

import math
from dataclasses import dataclass, field
from datetime import date

# Explicit "all formats" marker. An empty format set means no formats.
ANY_FORMAT = "*"


@dataclass(frozen=True)
class RunConfig:
    """
    Attributes:
        formats: Format names to include (exact, case-sensitive); ANY_FORMAT for all
        half_life_days: Days after which a decklist counts half as much
        max_age_days: Decklists older than this are dropped entirely
        weighting_enabled: When False every surviving decklist has weight 1.0
        now: Reference date ages are measured from
        include_sideboard: Whether sideboard cards count toward the totals
    """

    formats: frozenset[str]
    half_life_days: float
    max_age_days: float
    weighting_enabled: bool
    now: date = field(default_factory=date.today)
    include_sideboard: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.formats, frozenset):
            object.__setattr__(self, "formats", frozenset(self.formats))
        if not math.isfinite(self.half_life_days) or self.half_life_days <= 0:
            raise ValueError(f"half_life_days must be positive, got {self.half_life_days}")
        if math.isnan(self.max_age_days) or self.max_age_days < 0:
            raise ValueError(f"max_age_days must be non-negative, got {self.max_age_days}")

