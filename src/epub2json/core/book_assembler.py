"""Run the extraction pipeline and assemble the book document."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from epub2json.config import ExtractionSettings
from epub2json.core.archive import ArchiveIndex
from epub2json.core.chapter_extractor import ChapterExtractor
from epub2json.core.container import locate_package
from epub2json.core.navigation import NavigationMap, parse_navigation
from epub2json.core.package_parser import parse_package
from epub2json.models.book import Book, Chapter
from epub2json.models.package import PackageDocument

log = logging.getLogger(__name__)


def assemble_book(
    package: PackageDocument,
    chapters: list[Chapter],
    source_path: Path,
    settings: ExtractionSettings | None = None,
    generated_at: datetime | None = None,
) -> Book:
    """Combine package metadata with the extracted chapters."""
    settings = settings or ExtractionSettings()
    metadata = package.metadata

    return Book(
        title=metadata.title or source_path.stem,
        creators=list(metadata.creators),
        language=metadata.language or settings.default_language,
        source_file=source_path.name,
        generated_at=generated_at or datetime.now(timezone.utc),
        chapter_count=len(chapters),
        chapters=chapters,
    )


def load_navigation(archive: ArchiveIndex, package: PackageDocument) -> NavigationMap:
    """Read chapter titles from the navigation document, if the book has one."""
    nav_item = package.nav_item
    if nav_item is None:
        log.debug("Package declares no navigation document")
        return {}

    data = archive.read(nav_item.href)
    if not data:
        log.debug("Navigation document %s not found", nav_item.href)
        return {}
    return parse_navigation(data, nav_item.href)


def extract_book_from_archive(
    archive: ArchiveIndex,
    source_path: Path,
    settings: ExtractionSettings | None = None,
) -> Book:
    """Extract a book from an already indexed archive."""
    settings = settings or ExtractionSettings()

    package_path = locate_package(archive)
    package = parse_package(archive.read(package_path), package_path)
    nav_titles = load_navigation(archive, package)
    chapters = ChapterExtractor(archive, package, nav_titles, settings).extract()

    log.info(
        "Extracted %d of %d spine entries from %s",
        len(chapters),
        len(package.spine),
        source_path.name,
    )
    return assemble_book(package, chapters, source_path, settings)


def extract_book(epub_path: Path, settings: ExtractionSettings | None = None) -> Book:
    """Read an EPUB file from disk and extract its chapters.

    Raises:
        Epub2JsonError: Any of its subclasses, for archives that cannot be read
    """
    epub_path = Path(epub_path)
    return extract_book_from_archive(ArchiveIndex.from_path(epub_path), epub_path, settings)
