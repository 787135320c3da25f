from topcards.models.ranking import AggregateWeight, RankedEntry


def rank_cards(weights: AggregateWeight, top_n: int | None = None) -> list[RankedEntry]:
    """
    Order cards by score.

    Sorted by score descending; equal scores are ordered by name ascending so
    identical inputs always give identical output.

    Args:
        weights: Card name -> accumulated score
        top_n: Maximum number of entries to return (None for all)

    Returns:
        Ranked entries, at most top_n long

    Raises:
        ValueError: If top_n is negative
    """
    if top_n is not None and top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")

    ordered = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    if top_n is not None:
        ordered = ordered[:top_n]

    return [RankedEntry(name=name, score=score) for name, score in ordered]


def format_entry(entry: RankedEntry, precision: int = 2) -> str:
    """Render an entry as "<score> <name>", e.g. "12.50 Lightning Bolt"."""
    return f"{entry.score:.{precision}f} {entry.name}"


def format_ranking(entries: list[RankedEntry], precision: int = 2) -> list[str]:
    """Render ranked entries, one line per card."""
    return [format_entry(entry, precision) for entry in entries]
