from collections.abc import Iterable

from topcards.models.run_config import ANY_FORMAT


def parse_format_list(text: str) -> frozenset[str]:
    """
    Parse a comma-separated format list.

    "Standard, Modern" -> {"Standard", "Modern"}. Blank items are dropped,
    so an empty string yields an empty set (which matches nothing).
    """
    return frozenset(part.strip() for part in text.split(",") if part.strip())


def is_format_included(record_format: str, formats: Iterable[str]) -> bool:
    """
    Check if a decklist's format is requested.

    Matching is exact and case-sensitive. An empty set includes nothing;
    ANY_FORMAT includes every named format. Records without a format are
    never included.
    """
    if not record_format:
        return False

    formats = formats if isinstance(formats, (set, frozenset)) else set(formats)
    return ANY_FORMAT in formats or record_format in formats
