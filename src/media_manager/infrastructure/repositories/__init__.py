"""
Repository Implementations - Infrastructure Layer

This package contains repository implementations for data access,
following the Repository pattern from Domain-Driven Design.
"""

from .catalog_repository import InMemoryMediaRepository
from .file_based_repository import FileBasedMediaRepository

__all__ = [
    "InMemoryMediaRepository",
    "FileBasedMediaRepository",
]
