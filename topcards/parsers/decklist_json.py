"""
Parser for tournament decklist JSON files.

Supports:
- Tournament files (decklist cache layout):
    {"tournament": {"format": "Modern", "date": "2024-05-01"},
     "decks": [{"mainboard": [{"count": 4, "name": "..."}], "sideboard": [...]}]}
- Single decklist files:
    {"format": "Modern", "date": "2024-05-01", "cards": [{"quantity": 4, "name": "..."}]}

Keys are matched case-insensitively and unknown keys are ignored. Bad fields
fall back to defaults instead of failing the file.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from topcards.models.decklist import CardEntry, DecklistRecord

logger = logging.getLogger(__name__)

# Matches ".../2024/05/01/..." in a file path
# Groups: (year, month, day)
PATH_DATE_PATTERN = re.compile(r"/(\d{4})/(\d{2})/(\d{2})/")

NAME_KEYS = ("name", "card_name", "cardname")
QUANTITY_KEYS = ("count", "quantity", "qty")
DATE_KEYS = ("date", "event_date")
MAINBOARD_KEYS = ("mainboard", "cards", "main")
SIDEBOARD_KEYS = ("sideboard", "side")

DEFAULT_QUANTITY = 1


class DecklistParseError(ValueError):
    """Raised when a payload cannot be read as a decklist file at all."""


@dataclass
class ParsedDecklists:
    """Records parsed from one payload plus counts of defaulted fields."""

    records: list[DecklistRecord] = field(default_factory=list)
    invalid_quantities: int = 0
    invalid_dates: int = 0


def _lower_keys(obj: Any) -> dict[str, Any]:
    if not isinstance(obj, dict):
        return {}
    return {key.lower(): value for key, value in obj.items() if isinstance(key, str)}


def _first(obj: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def parse_quantity(value: Any) -> tuple[int, bool]:
    """
    Read a card quantity.

    Returns:
        (quantity, defaulted). Non-negative integers, integral floats and digit
        strings are accepted; anything else yields (1, True).
    """
    if isinstance(value, bool):
        return DEFAULT_QUANTITY, True
    if isinstance(value, int) and value >= 0:
        return value, False
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return int(value), False
    if isinstance(value, str) and value.strip().isdecimal():
        try:
            return int(value.strip()), False
        except ValueError:
            return DEFAULT_QUANTITY, True
    return DEFAULT_QUANTITY, True


def parse_event_date(value: Any) -> date | None:
    """
    Read an event date from an ISO-8601 date or datetime string.

    Returns None for anything unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def date_from_path(path: Path | None) -> date | None:
    """Extract the event date from a ".../YYYY/MM/DD/..." path, if present."""
    if path is None:
        return None

    match = PATH_DATE_PATTERN.search(Path(path).as_posix())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_card_entries(items: Any) -> tuple[list[CardEntry], int]:
    """
    Parse a list of card objects.

    Entries without a name, and entries with quantity 0, are dropped.

    Returns:
        (entries, number of quantities that fell back to the default)
    """
    if not isinstance(items, list):
        return [], 0

    entries: list[CardEntry] = []
    defaulted = 0

    for item in items:
        card = _lower_keys(item)
        name = _first(card, NAME_KEYS)
        if not isinstance(name, str) or not name.strip():
            continue

        quantity, was_defaulted = parse_quantity(_first(card, QUANTITY_KEYS))
        if was_defaulted:
            defaulted += 1
            logger.debug("Invalid quantity for %r, using %d", name, quantity)
        if quantity == 0:
            continue

        entries.append(CardEntry(name=name.strip(), quantity=quantity))

    return entries, defaulted


def parse_decklist_payload(payload: Any, source: Path | None = None) -> ParsedDecklists:
    """
    Parse a decoded JSON payload into decklist records.

    Args:
        payload: Result of json.load on one file
        source: Path the payload came from; used as a date fallback and for logging

    Returns:
        ParsedDecklists with one record per deck in the payload.

    Raises:
        DecklistParseError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise DecklistParseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    root = _lower_keys(payload)
    tournament = _lower_keys(root.get("tournament"))

    format_name = _first(tournament, ("format",))
    if format_name is None:
        format_name = root.get("format")
    format_name = format_name.strip() if isinstance(format_name, str) else ""

    raw_date = _first(tournament, DATE_KEYS)
    if raw_date is None:
        raw_date = _first(root, DATE_KEYS)
    event_date = parse_event_date(raw_date)
    if event_date is None:
        event_date = date_from_path(source)

    decks = root.get("decks")
    if isinstance(decks, list):
        deck_objects = [_lower_keys(deck) for deck in decks if isinstance(deck, dict)]
    else:
        deck_objects = [root]

    result = ParsedDecklists()

    for deck in deck_objects:
        mainboard, main_defaulted = parse_card_entries(_first(deck, MAINBOARD_KEYS))
        sideboard, side_defaulted = parse_card_entries(_first(deck, SIDEBOARD_KEYS))
        result.invalid_quantities += main_defaulted + side_defaulted

        if event_date is None:
            result.invalid_dates += 1

        result.records.append(
            DecklistRecord(
                format=format_name,
                event_date=event_date,
                cards=tuple(mainboard),
                sideboard=tuple(sideboard),
                source=source,
            )
        )

    if event_date is None and result.records:
        logger.debug("No usable event date in %s", source)

    return result
