"""
Line-oriented text format for a Library and its Catalog.

Layout::

    <numRecords>
    <id> <medium> <rating> <title>        one line per record, ascending by title
    <numCollections>
    <name> <memberCount>                  one block per collection, ascending by name
    <memberTitle>                         one line per member, ascending by title

Restoring builds brand new Library and Catalog objects, so a rejected file
never touches the caller's live state.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Dict, Iterable, Iterator, TextIO, Tuple

from ...domain.catalog.entities import Catalog, Collection, Library, Record
from ...domain.result import InvalidFormatError, Result, try_catch
from ...domain.value_objects import is_storable_rating, is_valid_title

logger = logging.getLogger(__name__)

MSG_INVALID_FILE = "Invalid data found in file!"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class LineReader:
    """Hands out lines one at a time, failing at end of input."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self.line_number = 0

    def next_line(self) -> str:
        try:
            line = next(self._lines)
        except StopIteration:
            raise self.invalid("unexpected end of file") from None

        self.line_number += 1
        return line.removesuffix("\n")

    def invalid(self, reason: str) -> InvalidFormatError:
        logger.warning("Rejecting saved data at line %d: %s", self.line_number, reason)
        return InvalidFormatError(MSG_INVALID_FILE)


def _parse_int(token: str, reader: LineReader) -> int:
    if not _INTEGER.fullmatch(token):
        raise reader.invalid(f"expected an integer, got {token!r}")
    return int(token)


def _read_count(reader: LineReader) -> int:
    line = reader.next_line().strip()
    count = _parse_int(line, reader)
    if count < 0:
        raise reader.invalid(f"negative count {count}")
    return count


# Writing -------------------------------------------------------------------

def dump_record(record: Record, out: TextIO) -> None:
    out.write(f"{record.id} {record.medium} {record.rating} {record.title}\n")


def dump_library(library: Library, out: TextIO) -> None:
    out.write(f"{library.num_records}\n")
    for record in library.records:
        dump_record(record, out)


def dump_collection(collection: Collection, out: TextIO) -> None:
    out.write(f"{collection.name} {len(collection)}\n")
    for record in collection.members:
        out.write(f"{record.title}\n")


def dump_catalog(catalog: Catalog, out: TextIO) -> None:
    out.write(f"{catalog.num_collections}\n")
    for collection in catalog.collections:
        dump_collection(collection, out)


def dump(library: Library, catalog: Catalog, out: TextIO) -> None:
    """Write the library followed by the catalog."""
    dump_library(library, out)
    dump_catalog(catalog, out)


def dumps(library: Library, catalog: Catalog) -> str:
    buffer = io.StringIO()
    dump(library, catalog, buffer)
    return buffer.getvalue()


# Reading -------------------------------------------------------------------

def read_record(reader: LineReader) -> Record:
    """Parse one ``id medium rating title`` line."""
    fields = reader.next_line().split(maxsplit=3)
    if len(fields) < 4:
        raise reader.invalid("record line needs an id, a medium, a rating and a title")

    id_token, medium, rating_token, title = fields
    if not is_valid_title(title):
        raise reader.invalid(f"title {title!r} has stray whitespace")

    record_id = _parse_int(id_token, reader)
    if record_id < 1:
        raise reader.invalid(f"record id {record_id} is not positive")

    rating = _parse_int(rating_token, reader)
    if not is_storable_rating(rating):
        raise reader.invalid(f"rating {rating} is out of range")

    return Record(medium=medium, title=title, id=record_id, rating=rating)


def read_library(reader: LineReader) -> Library:
    library = Library()
    for _ in range(_read_count(reader)):
        record = read_record(reader)
        if library.insert_restored(record).is_failure():
            raise reader.invalid(f"duplicate record {record.id} {record.title!r}")
    return library


def read_collection(reader: LineReader, library: Library) -> Collection:
    """Parse a collection block, resolving member titles against library."""
    fields = reader.next_line().split()
    if len(fields) != 2:
        raise reader.invalid("collection header needs a name and a member count")

    name, count_token = fields
    count = _parse_int(count_token, reader)
    if count < 0:
        raise reader.invalid(f"negative member count {count}")

    # every title is resolved before any membership count changes
    members: Dict[int, Record] = {}
    for _ in range(count):
        title = reader.next_line()
        record = library.find_record_by_title(title)
        if record.is_failure():
            raise reader.invalid(f"unknown member title {title!r}")
        if record.value().id in members:
            raise reader.invalid(f"duplicate member title {title!r}")
        members[record.value().id] = record.value()

    collection = Collection(name)
    for record in members.values():
        collection.add_member(record)
    return collection


def read_catalog(reader: LineReader, library: Library) -> Catalog:
    """Parse every collection block; on failure no record keeps a membership."""
    catalog = Catalog()
    try:
        for _ in range(_read_count(reader)):
            collection = read_collection(reader, library)
            if catalog.insert_restored(collection).is_failure():
                collection.clear()
                raise reader.invalid(f"duplicate collection {collection.name!r}")
    except InvalidFormatError:
        catalog.clear()
        raise
    return catalog


def restore_library(lines: Iterable[str]) -> Result[Library, InvalidFormatError]:
    return try_catch(lambda: read_library(LineReader(lines)), InvalidFormatError)


def restore_catalog(lines: Iterable[str], library: Library) -> Result[Catalog, InvalidFormatError]:
    return try_catch(lambda: read_catalog(LineReader(lines), library), InvalidFormatError)


def load(lines: Iterable[str]) -> Result[Tuple[Library, Catalog], InvalidFormatError]:
    """Read a library and then a catalog that refers to it."""
    def _load() -> Tuple[Library, Catalog]:
        reader = LineReader(lines)
        library = read_library(reader)
        return library, read_catalog(reader, library)

    return try_catch(_load, InvalidFormatError)


def loads(text: str) -> Result[Tuple[Library, Catalog], InvalidFormatError]:
    return load(io.StringIO(text))
