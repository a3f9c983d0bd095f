"""
Domain Layer - Media Manager

Bounded Contexts:
- Catalog: records, collections and their consistency rules
"""

from .value_objects import (
    UNRATED,
    MIN_RATING,
    MAX_RATING,
    CollectionStatistics,
    normalize_title,
)
from .result import (
    Result,
    Success,
    Failure,
    success,
    failure,
    RecoveryHint,
    DomainError,
    ValidationError,
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
from .catalog import Record, Collection, Catalog, Library, MediaService

__all__ = [
    # Value objects
    "UNRATED",
    "MIN_RATING",
    "MAX_RATING",
    "CollectionStatistics",
    "normalize_title",
    # Results and errors
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "RecoveryHint",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "InUseError",
    "RangeError",
    "AlreadyMemberError",
    "NotMemberError",
    "InvalidFormatError",
    "StorageError",
    "InputError",
    # Catalog context
    "Record",
    "Collection",
    "Catalog",
    "Library",
    "MediaService",
]
