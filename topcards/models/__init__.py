from topcards.models.decklist import CardEntry, DecklistRecord
from topcards.models.ranking import AggregateWeight, RankedEntry
from topcards.models.run_config import ANY_FORMAT, RunConfig

__all__ = [
    "ANY_FORMAT",
    "AggregateWeight",
    "CardEntry",
    "DecklistRecord",
    "RankedEntry",
    "RunConfig",
]
