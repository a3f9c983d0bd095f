"""Catalog Context Entities.

This module defines the core entities for the Catalog bounded context:

- Record: a single media item with a title, a medium and a rating
- Collection: a named membership set over Records
- Catalog: the named Collections
- Library: the Records, indexed by id and by title

Records are stored once, in the Library's id-keyed table. The title index maps
titles to ids, and Collections hold references to the same Record objects.
Each Record keeps a membership_count equal to the number of Collections whose
membership set contains it; every mutation below keeps that count exact.
"""

from __future__ import annotations

import itertools
import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

from ..result import (
    AlreadyMemberError,
    DomainError,
    DuplicateError,
    InUseError,
    NotFoundError,
    NotMemberError,
    RangeError,
    RecoveryHint,
    Result,
    ValidationError,
    failure,
    success,
)
from ..value_objects import (
    UNRATED,
    UNRATED_MARKER,
    CollectionStatistics,
    is_single_word,
    is_valid_rating,
    is_valid_title,
)

logger = logging.getLogger(__name__)

MSG_NO_SUCH_TITLE = "No record with that title!"
MSG_NO_SUCH_ID = "No record with that ID!"
MSG_DUPLICATE_ID = "Library already has a record with this ID!"
MSG_DUPLICATE_TITLE = "Library already has a record with this title!"
MSG_RECORD_IN_USE = "Cannot delete a record that is a member of a collection!"
MSG_COLLECTIONS_NOT_EMPTY = "Cannot clear all records unless all collections are empty!"
MSG_NO_MATCHES = "No records contain that string!"
MSG_RATING_OUT_OF_RANGE = "Rating is out of range!"
MSG_NO_SUCH_COLLECTION = "No collection with that name!"
MSG_DUPLICATE_COLLECTION = "Catalog already has a collection with this name!"
MSG_ALREADY_MEMBER = "Record is already a member in the collection!"
MSG_NOT_MEMBER = "Record is not a member in the collection!"
MSG_INVALID_MEDIUM = "Medium must be a single word!"
MSG_INVALID_TITLE = "Title must be non-empty with single spaces between words!"
MSG_INVALID_COLLECTION_NAME = "Collection name must be a single word!"

LIBRARY_EMPTY = "Library is empty"
CATALOG_EMPTY = "Catalog is empty"


@dataclass(eq=False)
class Record:
    """
    Represents a single media item.

    The id never changes once assigned. The title is changed only through
    Library.modify_title so the title index stays consistent.
    """

    medium: str
    title: str
    id: int
    rating: int = UNRATED
    membership_count: int = 0

    @property
    def is_rated(self) -> bool:
        """Check if the record has been given a rating."""
        return self.rating != UNRATED

    def set_rating(self, rating: int) -> Result[Record, RangeError]:
        """Set the rating; only 1 through 5 may be set explicitly."""
        if not is_valid_rating(rating):
            return failure(RangeError(MSG_RATING_OUT_OF_RANGE))

        self.rating = rating
        return success(self)

    def __str__(self) -> str:
        rating = str(self.rating) if self.is_rated else UNRATED_MARKER
        return f"{self.id}: {self.medium} {rating} {self.title}"


def sort_by_title(records: Iterable[Record]) -> List[Record]:
    """Sort records by title in ascending order."""
    return sorted(records, key=lambda record: record.title)


def format_records(records: Iterable[Record]) -> str:
    """Render records one per line."""
    return "\n".join(str(record) for record in records)


class Collection:
    """
    A named set of Records, keyed by Record id.

    Adding a member increments the Record's membership_count and removing one
    decrements it.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._members: Dict[int, Record] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def members(self) -> List[Record]:
        """Members sorted by title."""
        return sort_by_title(self._members.values())

    @property
    def member_ids(self) -> frozenset[int]:
        return frozenset(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.members)

    def __contains__(self, record: object) -> bool:
        return isinstance(record, Record) and self._members.get(record.id) is record

    def add_member(self, record: Record) -> Result[Record, AlreadyMemberError]:
        """Insert a record into the membership set."""
        if record.id in self._members:
            return failure(AlreadyMemberError(MSG_ALREADY_MEMBER))

        self._members[record.id] = record
        record.membership_count += 1
        logger.debug("Added record %d to collection %s", record.id, self._name)
        return success(record)

    def delete_member(self, record: Record) -> Result[Record, NotMemberError]:
        """Remove a record from the membership set."""
        if record.id not in self._members:
            return failure(NotMemberError(MSG_NOT_MEMBER))

        del self._members[record.id]
        record.membership_count -= 1
        logger.debug("Removed record %d from collection %s", record.id, self._name)
        return success(record)

    def clear(self) -> int:
        """Release every member. Returns how many were released."""
        released = len(self._members)
        for record in self._members.values():
            record.membership_count -= 1
        self._members = {}
        return released

    def __str__(self) -> str:
        header = f"Collection {self._name} contains:"
        if not self._members:
            return f"{header} None"
        return f"{header}\n{format_records(self.members)}"

    def __repr__(self) -> str:
        return f"Collection({self._name!r}, members={sorted(self._members)})"


class Catalog:
    """The set of Collections, keyed by unique name."""

    def __init__(self) -> None:
        self._collections: Dict[str, Collection] = {}

    @property
    def num_collections(self) -> int:
        return len(self._collections)

    @property
    def collections(self) -> List[Collection]:
        """Collections sorted by name."""
        return sorted(self._collections.values(), key=lambda c: c.name)

    def __len__(self) -> int:
        return len(self._collections)

    def __iter__(self) -> Iterator[Collection]:
        return iter(self.collections)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def find_collection(self, name: str) -> Result[Collection, NotFoundError]:
        """Look up a collection by name."""
        collection = self._collections.get(name)
        if collection is None:
            return failure(NotFoundError(MSG_NO_SUCH_COLLECTION))
        return success(collection)

    def add_collection(self, name: str) -> Result[Collection, DomainError]:
        """Create an empty collection."""
        if not is_single_word(name):
            return failure(ValidationError(MSG_INVALID_COLLECTION_NAME))
        if name in self._collections:
            return failure(DuplicateError(MSG_DUPLICATE_COLLECTION))

        collection = Collection(name)
        self._collections[name] = collection
        logger.debug("Added collection %s", name)
        return success(collection)

    def delete_collection(self, name: str) -> Result[Collection, NotFoundError]:
        """Release a collection's members, then remove it."""
        collection = self._collections.get(name)
        if collection is None:
            return failure(NotFoundError(MSG_NO_SUCH_COLLECTION))

        collection.clear()
        del self._collections[name]
        logger.debug("Deleted collection %s", name)
        return success(collection)

    def clear(self) -> None:
        """Release every collection's members, then drop all collections."""
        for collection in self._collections.values():
            collection.clear()
        self._collections = {}

    def has_members(self) -> bool:
        """Check if any collection still references a record."""
        return any(len(collection) > 0 for collection in self._collections.values())

    def membership_counts(self) -> Counter[int]:
        """Count, per record id, the collections whose membership contains it."""
        counts: Counter[int] = Counter()
        for collection in self._collections.values():
            counts.update(collection.member_ids)
        return counts

    def collection_statistics(self) -> CollectionStatistics:
        """Count records in at least one, in more than one, and all memberships."""
        counts = self.membership_counts()
        return CollectionStatistics(
            in_at_least_one=sum(1 for n in counts.values() if n >= 1),
            in_more_than_one=sum(1 for n in counts.values() if n >= 2),
            total_memberships=sum(len(c) for c in self._collections.values()),
        )

    def combine_collections(
        self, first_name: str, second_name: str, dst_name: str
    ) -> Result[Collection, DomainError]:
        """
        Create dst_name holding the union of two existing collections.

        A record in both sources becomes a single member of the destination.
        The sources are not modified.
        """
        first = self._collections.get(first_name)
        second = self._collections.get(second_name)
        if first is None or second is None:
            return failure(NotFoundError(MSG_NO_SUCH_COLLECTION))
        if not is_single_word(dst_name):
            return failure(ValidationError(MSG_INVALID_COLLECTION_NAME))
        if dst_name in self._collections:
            return failure(DuplicateError(MSG_DUPLICATE_COLLECTION))

        dst = Collection(dst_name)
        for record in itertools.chain(first.members, second.members):
            if record not in dst:
                dst.add_member(record)

        self._collections[dst_name] = dst
        logger.debug("Combined %s and %s into %s", first_name, second_name, dst_name)
        return success(dst)

    def insert_restored(self, collection: Collection) -> Result[Collection, DuplicateError]:
        """Adopt a collection read back from storage."""
        if collection.name in self._collections:
            return failure(DuplicateError(MSG_DUPLICATE_COLLECTION))

        self._collections[collection.name] = collection
        return success(collection)

    def __str__(self) -> str:
        if not self._collections:
            return CATALOG_EMPTY

        lines = [f"Catalog contains {len(self._collections)} collections:"]
        lines.extend(str(collection) for collection in self.collections)
        return "\n".join(lines)


class Library:
    """
    The set of Records, indexed by id and by title.

    Records live in a single table keyed by id; the title index maps each
    title to an id. Ids start at 1 and are never reused, even after deletion.
    """

    def __init__(self) -> None:
        self._records: Dict[int, Record] = {}
        self._title_index: Dict[str, int] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def num_records(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Record]:
        """Records sorted by title."""
        return sort_by_title(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __contains__(self, title: object) -> bool:
        return title in self._title_index

    def find_record_by_title(self, title: str) -> Result[Record, NotFoundError]:
        record_id = self._title_index.get(title)
        if record_id is None:
            return failure(NotFoundError(MSG_NO_SUCH_TITLE, RecoveryHint.KEEP_LINE))
        return success(self._records[record_id])

    def find_record_by_id(self, record_id: int) -> Result[Record, NotFoundError]:
        record = self._records.get(record_id)
        if record is None:
            return failure(NotFoundError(MSG_NO_SUCH_ID))
        return success(record)

    def add_record(self, medium: str, title: str) -> Result[int, DomainError]:
        """Create an unrated record and return its new id."""
        if not is_single_word(medium):
            return failure(ValidationError(MSG_INVALID_MEDIUM))
        if not is_valid_title(title):
            return failure(ValidationError(MSG_INVALID_TITLE, RecoveryHint.KEEP_LINE))
        if title in self._title_index:
            return failure(DuplicateError(MSG_DUPLICATE_TITLE, RecoveryHint.KEEP_LINE))

        record_id = self._next_id
        self._next_id += 1
        self._records[record_id] = Record(medium=medium, title=title, id=record_id)
        self._title_index[title] = record_id
        logger.debug("Added record %d %s", record_id, title)
        return success(record_id)

    def delete_record(self, title: str) -> Result[Record, DomainError]:
        """Remove a record that no collection references."""
        record_id = self._title_index.get(title)
        if record_id is None:
            return failure(NotFoundError(MSG_NO_SUCH_TITLE, RecoveryHint.KEEP_LINE))

        record = self._records[record_id]
        if record.membership_count > 0:
            return failure(InUseError(MSG_RECORD_IN_USE, RecoveryHint.KEEP_LINE))

        del self._title_index[title]
        del self._records[record_id]
        logger.debug("Deleted record %d %s", record_id, title)
        return success(record)

    def modify_title(self, record: Record, new_title: str) -> Result[Record, DomainError]:
        """Give a record a new title, re-keying only the title index."""
        if self._records.get(record.id) is not record:
            return failure(NotFoundError(MSG_NO_SUCH_ID))
        if not is_valid_title(new_title):
            return failure(ValidationError(MSG_INVALID_TITLE, RecoveryHint.KEEP_LINE))

        holder = self._title_index.get(new_title)
        if holder is not None and holder != record.id:
            return failure(DuplicateError(MSG_DUPLICATE_TITLE, RecoveryHint.KEEP_LINE))

        del self._title_index[record.title]
        record.title = new_title
        self._title_index[new_title] = record.id
        return success(record)

    def clear(self, catalog: Catalog) -> Result[None, InUseError]:
        """Drop every record, provided no collection in catalog has members."""
        if catalog.has_members():
            return failure(InUseError(MSG_COLLECTIONS_NOT_EMPTY))

        self._reset()
        return success(None)

    def clear_all(self, catalog: Catalog) -> None:
        """Empty the catalog, then the library."""
        catalog.clear()
        self._reset()

    def find_string(self, substr: str) -> Result[List[Record], NotFoundError]:
        """Find records whose title contains substr, ignoring case."""
        pattern = re.compile(re.escape(substr), re.IGNORECASE)
        matches = [record for record in self._records.values() if pattern.search(record.title)]

        if not matches:
            return failure(NotFoundError(MSG_NO_MATCHES))
        return success(sort_by_title(matches))

    def list_ratings(self) -> List[Record]:
        """Records by rating, highest first, ties broken by title."""
        return sorted(self._records.values(), key=lambda r: (-r.rating, r.title))

    def insert_restored(self, record: Record) -> Result[Record, DuplicateError]:
        """Adopt a record read back from storage, keeping ids and titles unique."""
        if record.id in self._records:
            return failure(DuplicateError(MSG_DUPLICATE_ID))
        if record.title in self._title_index:
            return failure(DuplicateError(MSG_DUPLICATE_TITLE))

        self._records[record.id] = record
        self._title_index[record.title] = record.id
        self._next_id = max(self._next_id, record.id + 1)
        return success(record)

    def _reset(self) -> None:
        self._records = {}
        self._title_index = {}
        self._next_id = 1

    def __str__(self) -> str:
        if not self._records:
            return LIBRARY_EMPTY
        return f"Library contains {len(self._records)} records:\n{format_records(self.records)}"
