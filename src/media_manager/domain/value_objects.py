"""
Domain value objects for Media Manager.

Small immutable helpers shared by the catalog entities, the text format codec
and the interactive front end.
"""

from __future__ import annotations

from dataclasses import dataclass

UNRATED = 0
MIN_RATING = 1
MAX_RATING = 5

UNRATED_MARKER = "u"


def is_valid_rating(rating: int) -> bool:
    """Check whether a rating may be set explicitly (1 to 5)."""
    return MIN_RATING <= rating <= MAX_RATING


def is_storable_rating(rating: int) -> bool:
    """Check whether a rating may appear in a saved file (0 to 5)."""
    return UNRATED <= rating <= MAX_RATING


def normalize_title(raw: str) -> str:
    """Collapse whitespace runs to single spaces and trim both ends."""
    return " ".join(raw.split())


def is_valid_title(title: str) -> bool:
    """Check that a title is non-empty and already normalized."""
    return bool(title) and title == normalize_title(title)


def is_single_word(token: str) -> bool:
    """Check that a medium or collection name is one non-empty token."""
    return token.split() == [token]


@dataclass(frozen=True, slots=True)
class CollectionStatistics:
    """
    Value object summarizing how records are spread across collections.

    total_memberships counts every (collection, record) pair, so it may exceed
    the number of records in the library.
    """

    in_at_least_one: int = 0
    in_more_than_one: int = 0
    total_memberships: int = 0

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.in_at_least_one, self.in_more_than_one, self.total_memberships)

    def describe(self, num_records: int) -> str:
        """Render the statistics against the size of the library."""
        return (
            f"{self.in_at_least_one} out of {num_records} Records appear in at least one Collection\n"
            f"{self.in_more_than_one} out of {num_records} Records appear in more than one Collection\n"
            f"Collections contain a total of {self.total_memberships} Records"
        )
