"""Catalog Context Repository Interfaces.

A repository persists a whole Library together with the Catalog that refers
to it. Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import Tuple

from ..result import DomainError, Result, StorageError
from .entities import Catalog, Library


class MediaRepository(ABC):
    """Stores and retrieves a Library and its Catalog under a name."""

    @abstractmethod
    def save(self, location: str, library: Library, catalog: Catalog) -> Result[str, StorageError]:
        """Persist library and catalog to location."""
        pass

    @abstractmethod
    def load(self, location: str) -> Result[Tuple[Library, Catalog], DomainError]:
        """Read back a freshly built library and catalog from location."""
        pass
