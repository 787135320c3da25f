"""Shared payload factories for decklist tests."""

from datetime import date, timedelta
from typing import Any

NOW = date(2024, 6, 1)


def days_ago(days: int) -> date:
    """Date `days` before the fixed reference date."""
    return NOW - timedelta(days=days)


def deck(mainboard: dict[str, int], sideboard: dict[str, int] | None = None) -> dict[str, Any]:
    """Build a deck object from {name: count} mappings."""
    return {
        "mainboard": [{"count": count, "name": name} for name, count in mainboard.items()],
        "sideboard": [
            {"count": count, "name": name} for name, count in (sideboard or {}).items()
        ],
    }


def make_tournament(
    format_name: str | None = "Modern",
    event_date: date | str | None = NOW,
    decks: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a tournament payload in the decklist cache layout."""
    tournament: dict[str, Any] = {"name": "Test Challenge"}
    if format_name is not None:
        tournament["format"] = format_name
    if event_date is not None:
        tournament["date"] = (
            event_date.isoformat() if isinstance(event_date, date) else event_date
        )

    if decks is None:
        decks = [deck({"Lightning Bolt": 4})]

    return {"tournament": tournament, "decks": decks}
