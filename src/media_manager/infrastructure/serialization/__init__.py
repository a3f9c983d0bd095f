"""Serialization formats for the library and catalog."""

from . import text_format

__all__ = ["text_format"]
