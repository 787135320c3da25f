from topcards.parsers.decklist_json import (
    DecklistParseError,
    ParsedDecklists,
    date_from_path,
    parse_card_entries,
    parse_decklist_payload,
    parse_event_date,
    parse_quantity,
)

__all__ = [
    "DecklistParseError",
    "ParsedDecklists",
    "date_from_path",
    "parse_card_entries",
    "parse_decklist_payload",
    "parse_event_date",
    "parse_quantity",
]
