"""Two-letter command handlers for the interactive loop.

Each handler reads its own arguments from the InputReader and returns a
Result holding the text to print. Arguments are read one at a time and each
is checked before the next one is read, so a failure leaves the remaining
arguments unread for the loop to discard or keep.
"""

from typing import Callable, Dict

from .domain.catalog.entities import LIBRARY_EMPTY, format_records
from .domain.catalog.services import MediaService
from .domain.result import DomainError, Result, success
from .input_reader import InputReader

Handler = Callable[[MediaService, InputReader], Result[str, DomainError]]

QUIT = "qq"


def find_record(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return reader.read_title().flat_map(service.find_record_by_title).map(str)


def print_record(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return reader.read_int().flat_map(service.find_record_by_id).map(str)


def print_collection(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return service.describe_collection(reader.read_word())


def print_library(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return success(service.describe_library())


def print_catalog(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return success(service.describe_catalog())


def print_allocations(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return success(service.allocations().describe())


def add_record(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    medium = reader.read_word()
    return (
        reader.read_title()
        .flat_map(lambda title: service.add_record(medium, title))
        .map(lambda record_id: f"Record {record_id} added")
    )


def add_collection(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return (
        service.add_collection(reader.read_word())
        .map(lambda collection: f"Collection {collection.name} added")
    )


def add_member(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    name = reader.read_word()
    return (
        service.find_collection(name)
        .flat_map(lambda _: reader.read_int())
        .flat_map(lambda record_id: service.add_member(name, record_id))
        .map(lambda record: f"Member {record.id} {record.title} added")
    )


def modify_rating(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return (
        reader.read_int()
        .flat_map(service.find_record_by_id)
        .flat_map(lambda record: reader.read_int().flat_map(
            lambda rating: service.modify_rating(record.id, rating)
        ))
        .map(lambda record: f"Rating for record {record.id} changed to {record.rating}")
    )


def modify_title(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return (
        reader.read_int()
        .flat_map(service.find_record_by_id)
        .flat_map(lambda record: reader.read_title().flat_map(
            lambda title: service.modify_title(record.id, title)
        ))
        .map(lambda record: f"Title for record {record.id} changed to {record.title}")
    )


def delete_record(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return (
        reader.read_title()
        .flat_map(service.delete_record)
        .map(lambda record: f"Record {record.id} {record.title} deleted")
    )


def delete_collection(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return (
        service.delete_collection(reader.read_word())
        .map(lambda collection: f"Collection {collection.name} deleted")
    )


def delete_member(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    name = reader.read_word()
    return (
        service.find_collection(name)
        .flat_map(lambda _: reader.read_int())
        .flat_map(lambda record_id: service.delete_member(name, record_id))
        .map(lambda record: f"Member {record.id} {record.title} deleted")
    )


def clear_library(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return service.clear_library().map(lambda _: "All records deleted")


def clear_catalog(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    service.clear_catalog()
    return success("All collections deleted")


def clear_all(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    service.clear_all()
    return success("All data deleted")


def save_all(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return service.save_all(reader.read_word()).map(lambda _: "Data saved")


def restore_all(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return service.restore_all(reader.read_word()).map(lambda _: "Data loaded")


def find_string(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return service.find_string(reader.read_word()).map(format_records)


def list_ratings(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    records = service.list_ratings()
    return success(format_records(records) if records else LIBRARY_EMPTY)


def collection_statistics(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    return success(service.describe_statistics())


def combine_collections(service: MediaService, reader: InputReader) -> Result[str, DomainError]:
    first = reader.read_word()

    def _second(_) -> Result[str, DomainError]:
        second = reader.read_word()
        return service.find_collection(second).flat_map(lambda _: _combine(second))

    def _combine(second: str) -> Result[str, DomainError]:
        dst = reader.read_word()
        return service.combine_collections(first, second, dst).map(
            lambda _: f"Collections {first} and {second} combined into new collection {dst}"
        )

    return service.find_collection(first).flat_map(_second)


COMMANDS: Dict[str, Handler] = {
    "fr": find_record,
    "pr": print_record,
    "pc": print_collection,
    "pL": print_library,
    "pC": print_catalog,
    "pa": print_allocations,
    "ar": add_record,
    "ac": add_collection,
    "am": add_member,
    "mr": modify_rating,
    "mt": modify_title,
    "dr": delete_record,
    "dc": delete_collection,
    "dm": delete_member,
    "cL": clear_library,
    "cC": clear_catalog,
    "cA": clear_all,
    "sA": save_all,
    "rA": restore_all,
    "fs": find_string,
    "lr": list_ratings,
    "cs": collection_statistics,
    "cc": combine_collections,
}
