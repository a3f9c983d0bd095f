"""
In-memory Repository Implementation.

Keeps saved snapshots as text in a dictionary, going through the same format
as the file-based repository. Useful for testing and development.
"""

from typing import Dict, Tuple

from ...domain.catalog.entities import Catalog, Library
from ...domain.catalog.repositories import MediaRepository
from ...domain.result import DomainError, Result, StorageError, failure, success
from ..serialization import text_format
from .file_based_repository import MSG_UNOPENABLE_FILE


class InMemoryMediaRepository(MediaRepository):
    """In-memory implementation of MediaRepository for testing and development."""

    def __init__(self):
        self._snapshots: Dict[str, str] = {}

    def save(self, location: str, library: Library, catalog: Catalog) -> Result[str, StorageError]:
        self._snapshots[location] = text_format.dumps(library, catalog)
        return success(location)

    def load(self, location: str) -> Result[Tuple[Library, Catalog], DomainError]:
        text = self._snapshots.get(location)
        if text is None:
            return failure(StorageError(MSG_UNOPENABLE_FILE))
        return text_format.loads(text)

    def put(self, location: str, text: str) -> None:
        """Store raw text, as if a file with these contents existed."""
        self._snapshots[location] = text

    def get(self, location: str) -> str | None:
        return self._snapshots.get(location)
