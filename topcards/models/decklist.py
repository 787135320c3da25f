from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One line of a decklist.

    Attributes:
        name: Card name exactly as it appears in the source file
        quantity: Number of copies played (defaults to 1 when the source is invalid)
    """

    name: str
    quantity: int = 1


@dataclass(frozen=True, slots=True)
class DecklistRecord:
    """
    One player's list for one tournament event.

    Attributes:
        format: Declared format name (empty string when the source has none)
        event_date: Date of the event, None when missing or unparseable
        cards: Maindeck entries in file order
        sideboard: Sideboard entries in file order
        source: File the record was parsed from (for logging only)
    """

    format: str
    event_date: date | None
    cards: tuple[CardEntry, ...] = field(default_factory=tuple)
    sideboard: tuple[CardEntry, ...] = field(default_factory=tuple)
    source: Path | None = None

    def all_entries(self, include_sideboard: bool = True) -> tuple[CardEntry, ...]:
        """Maindeck followed by sideboard, unless the sideboard is excluded."""
        if include_sideboard:
            return self.cards + self.sideboard
        return self.cards
