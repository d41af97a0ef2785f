"""
Common Utilities

Helper functions used throughout the application.
"""

from collections.abc import Hashable, Iterable
from datetime import UTC, datetime
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        Current datetime with UTC timezone
    """
    return datetime.now(UTC)


def unique_in_order(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence of each.

    Args:
        items: Items to deduplicate

    Returns:
        List with duplicates removed, original order preserved

    Example:
        unique_in_order(["b", "a", "b"])  # ["b", "a"]
    """
    return list(dict.fromkeys(items))


def find_duplicates(items: Iterable[T]) -> list[T]:
    """Return items that occur more than once, in first-seen order."""
    seen: set[T] = set()
    duplicates: dict[T, None] = {}
    for item in items:
        if item in seen:
            duplicates[item] = None
        seen.add(item)
    return list(duplicates)
