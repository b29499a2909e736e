"""File I/O related utilities.

This package groups small modules that deal with reading schema and data
documents from disk and turning their text into generic data trees.
"""

from .loader import is_yaml_source, read_text, parse_document, load_document

__all__ = [
    "is_yaml_source",
    "read_text",
    "parse_document",
    "load_document",
]
