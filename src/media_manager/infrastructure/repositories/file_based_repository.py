"""
File-based Repository Implementation.

Persists the library and catalog as a plain text file in the line-oriented
format of the text_format module.
"""

import logging
from pathlib import Path
from typing import Tuple

from ...domain.catalog.entities import Catalog, Library
from ...domain.catalog.repositories import MediaRepository
from ...domain.result import DomainError, Result, StorageError, failure, success
from ..serialization import text_format

logger = logging.getLogger(__name__)

MSG_UNOPENABLE_FILE = "Could not open file!"


class FileBasedMediaRepository(MediaRepository):
    """MediaRepository storing one text file per save."""

    def __init__(self, base_dir: Path | None = None, encoding: str = "utf-8"):
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self.encoding = encoding

    def _resolve(self, location: str) -> Path:
        path = Path(location)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path
        return path

    def save(self, location: str, library: Library, catalog: Catalog) -> Result[str, StorageError]:
        """Write library and catalog to a file, replacing its contents."""
        path = self._resolve(location)
        contents = text_format.dumps(library, catalog)

        try:
            with open(path, "w", encoding=self.encoding, newline="\n") as f:
                f.write(contents)
        except OSError as e:
            logger.error("Failed to save data to %s: %s", path, e)
            return failure(StorageError(MSG_UNOPENABLE_FILE))

        logger.info("Saved %d records and %d collections to %s",
                    library.num_records, catalog.num_collections, path)
        return success(str(path))

    def load(self, location: str) -> Result[Tuple[Library, Catalog], DomainError]:
        """Read a file written by save()."""
        path = self._resolve(location)

        try:
            with open(path, "r", encoding=self.encoding) as f:
                result = text_format.load(f)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read data from %s: %s", path, e)
            return failure(StorageError(MSG_UNOPENABLE_FILE))

        if result.is_success():
            library, catalog = result.value()
            logger.info("Loaded %d records and %d collections from %s",
                        library.num_records, catalog.num_collections, path)
        return result
