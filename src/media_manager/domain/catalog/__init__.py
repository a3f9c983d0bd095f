"""
Catalog Context - Managing the media library and its collections.

This bounded context is responsible for:
- Managing records and their id and title indexes
- Managing named collections of records
- Keeping record membership counts consistent with collection contents
"""

from .entities import (
    Record,
    Collection,
    Catalog,
    Library,
    format_records,
    sort_by_title,
    LIBRARY_EMPTY,
    CATALOG_EMPTY,
)
from .services import MediaService

__all__ = [
    # Entities
    "Record",
    "Collection",
    "Catalog",
    "Library",
    # Helpers
    "format_records",
    "sort_by_title",
    "LIBRARY_EMPTY",
    "CATALOG_EMPTY",
    # Services
    "MediaService",
]
