from dataclasses import dataclass

# Card name -> accumulated weighted play count
AggregateWeight = dict[str, float]


@dataclass(frozen=True, slots=True)
class RankedEntry:
    """A card and its accumulated weighted score."""

    name: str
    score: float
