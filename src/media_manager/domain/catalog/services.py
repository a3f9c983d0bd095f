"""Catalog Context Services.

MediaService is the session context: it owns one Library and one Catalog and
is passed to whatever drives the application. All operations go through a
single re-entrant lock because the membership counts span both objects.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ...utils.memory_monitor import AllocationReport, take_snapshot
from ..result import (
    DomainError,
    InUseError,
    NotFoundError,
    Result,
    StorageError,
    success,
)
from ..value_objects import CollectionStatistics
from .entities import Catalog, Collection, Library, Record
from .repositories import MediaRepository

logger = logging.getLogger(__name__)


class MediaService:
    """Service for library and catalog operations."""

    def __init__(self, repository: Optional[MediaRepository] = None):
        if repository is None:
            from ...infrastructure.repositories import FileBasedMediaRepository
            repository = FileBasedMediaRepository()

        self.repository = repository
        self.library = Library()
        self.catalog = Catalog()
        self._lock = threading.RLock()

    # Records -------------------------------------------------------------
    def add_record(self, medium: str, title: str) -> Result[int, DomainError]:
        with self._lock:
            return self.library.add_record(medium, title)

    def find_record_by_title(self, title: str) -> Result[Record, NotFoundError]:
        with self._lock:
            return self.library.find_record_by_title(title)

    def find_record_by_id(self, record_id: int) -> Result[Record, NotFoundError]:
        with self._lock:
            return self.library.find_record_by_id(record_id)

    def modify_rating(self, record_id: int, rating: int) -> Result[Record, DomainError]:
        with self._lock:
            return self.library.find_record_by_id(record_id).flat_map(
                lambda record: record.set_rating(rating)
            )

    def modify_title(self, record_id: int, new_title: str) -> Result[Record, DomainError]:
        with self._lock:
            return self.library.find_record_by_id(record_id).flat_map(
                lambda record: self.library.modify_title(record, new_title)
            )

    def delete_record(self, title: str) -> Result[Record, DomainError]:
        with self._lock:
            return self.library.delete_record(title)

    def find_string(self, substr: str) -> Result[List[Record], NotFoundError]:
        with self._lock:
            return self.library.find_string(substr)

    def list_ratings(self) -> List[Record]:
        with self._lock:
            return self.library.list_ratings()

    # Collections ---------------------------------------------------------
    def add_collection(self, name: str) -> Result[Collection, DomainError]:
        with self._lock:
            return self.catalog.add_collection(name)

    def find_collection(self, name: str) -> Result[Collection, NotFoundError]:
        with self._lock:
            return self.catalog.find_collection(name)

    def delete_collection(self, name: str) -> Result[Collection, NotFoundError]:
        with self._lock:
            return self.catalog.delete_collection(name)

    def add_member(self, name: str, record_id: int) -> Result[Record, DomainError]:
        with self._lock:
            return self.catalog.find_collection(name).flat_map(
                lambda collection: self.library.find_record_by_id(record_id).flat_map(
                    collection.add_member
                )
            )

    def delete_member(self, name: str, record_id: int) -> Result[Record, DomainError]:
        with self._lock:
            return self.catalog.find_collection(name).flat_map(
                lambda collection: self.library.find_record_by_id(record_id).flat_map(
                    collection.delete_member
                )
            )

    def combine_collections(
        self, first_name: str, second_name: str, dst_name: str
    ) -> Result[Collection, DomainError]:
        with self._lock:
            return self.catalog.combine_collections(first_name, second_name, dst_name)

    def collection_statistics(self) -> CollectionStatistics:
        with self._lock:
            return self.catalog.collection_statistics()

    def describe_statistics(self) -> str:
        with self._lock:
            return self.catalog.collection_statistics().describe(self.library.num_records)

    def describe_library(self) -> str:
        with self._lock:
            return str(self.library)

    def describe_catalog(self) -> str:
        with self._lock:
            return str(self.catalog)

    def describe_collection(self, name: str) -> Result[str, NotFoundError]:
        with self._lock:
            return self.catalog.find_collection(name).map(str)

    # Whole-session operations ---------------------------------------------
    def clear_library(self) -> Result[None, InUseError]:
        with self._lock:
            return self.library.clear(self.catalog)

    def clear_catalog(self) -> None:
        with self._lock:
            self.catalog.clear()

    def clear_all(self) -> None:
        with self._lock:
            self.library.clear_all(self.catalog)

    def save_all(self, location: str) -> Result[str, StorageError]:
        with self._lock:
            return self.repository.save(location, self.library, self.catalog)

    def restore_all(self, location: str) -> Result[None, DomainError]:
        """Replace the library and catalog with saved ones, or leave both untouched."""
        with self._lock:
            loaded = self.repository.load(location)
            if loaded.is_failure():
                logger.warning("Restore from %s rejected: %s", location, loaded.error())
                return loaded

            self.library, self.catalog = loaded.value()
            return success(None)

    def allocations(self) -> AllocationReport:
        with self._lock:
            return AllocationReport(
                records=self.library.num_records,
                collections=self.catalog.num_collections,
                memory=take_snapshot(),
            )
