"""Data models."""

from epub2json.models.book import Book, Chapter
from epub2json.models.package import ManifestItem, PackageDocument, PackageMetadata

__all__ = [
    # Package models
    "ManifestItem",
    "PackageMetadata",
    "PackageDocument",
    # Output models
    "Chapter",
    "Book",
]
