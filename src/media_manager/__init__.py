"""Media Manager

An interactive manager for a small in-memory media library: titled, rated
records and named collections of them, saved to and restored from a flat
text file.
"""

__version__ = "0.1.0"

from .domain import (
    Record,
    Collection,
    Catalog,
    Library,
    MediaService,
    CollectionStatistics,
    Result,
    Success,
    Failure,
    RecoveryHint,
    DomainError,
    NotFoundError,
    DuplicateError,
    InUseError,
    RangeError,
    AlreadyMemberError,
    NotMemberError,
    InvalidFormatError,
    StorageError,
    InputError,
)
from .exceptions import MediaManagerError, ConfigurationError

__all__ = [
    # Entities and services
    "Record",
    "Collection",
    "Catalog",
    "Library",
    "MediaService",
    "CollectionStatistics",

    # Results and errors
    "Result",
    "Success",
    "Failure",
    "RecoveryHint",
    "DomainError",
    "NotFoundError",
    "DuplicateError",
    "InUseError",
    "RangeError",
    "AlreadyMemberError",
    "NotMemberError",
    "InvalidFormatError",
    "StorageError",
    "InputError",
    "MediaManagerError",
    "ConfigurationError",
]
