"""Extract chapter prose and titles from spine documents."""

import logging
import re
import warnings
from dataclasses import dataclass
from typing import Iterator

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from epub2json.config import ExtractionSettings
from epub2json.core.archive import ArchiveIndex
from epub2json.core.navigation import NavigationMap
from epub2json.core.text import clean_text
from epub2json.models.book import Chapter
from epub2json.models.package import PackageDocument

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

log = logging.getLogger(__name__)

# Ruby annotations, scripts and styles never count as prose
STRIPPED_TAGS = ["rt", "rp", "script", "style", "noscript"]
PARAGRAPH_SELECTOR = "body p, body li, body blockquote"

_DOCUMENT_SUFFIX = re.compile(r"\.(xhtml|html)$", re.IGNORECASE)
_GENERATED_TITLES = (
    re.compile(r"^part\d+", re.IGNORECASE),
    re.compile(r"^ch\d+$", re.IGNORECASE),
    re.compile(r"^id\d+$", re.IGNORECASE),
)


def looks_like_generated_title(title: str) -> bool:
    """True for placeholder titles such as 'Part0003', 'ch3' or 'id42'."""
    return any(pattern.search(title) for pattern in _GENERATED_TITLES)


def title_from_paragraphs(
    paragraphs: list[str],
    max_length: int = 22,
    min_length: int = 6,
) -> str:
    """Use the start of the first substantial paragraph as a title."""
    source = next((p for p in paragraphs if len(p) >= min_length), None)
    if source is None:
        return ""
    shortened = source[:max_length]
    return f"{shortened}..." if len(source) > max_length else shortened


@dataclass(frozen=True)
class ChapterContent:
    """Text pulled out of a single chapter document."""

    source: str
    heading: str
    document_title: str
    paragraphs: tuple[str, ...]

    @property
    def content_length(self) -> int:
        return sum(len(p) for p in self.paragraphs)


def extract_chapter_content(html_content: bytes, source: str) -> ChapterContent:
    """Parse a chapter document into heading, <title> and paragraphs."""
    soup = BeautifulSoup(html_content.decode("utf-8", errors="replace"), "lxml")

    for tag in soup(STRIPPED_TAGS):
        tag.decompose()

    heading = ""
    for name in ("h1", "h2", "h3"):
        element = soup.find(name)
        heading = clean_text(element.get_text()) if element else ""
        if heading:
            break

    paragraphs = []
    for element in soup.select(PARAGRAPH_SELECTOR):
        paragraph = clean_text(element.get_text())
        if paragraph:
            paragraphs.append(paragraph)

    if not paragraphs and soup.body is not None:
        fallback = clean_text(soup.body.get_text())
        if fallback:
            paragraphs.append(fallback)

    title_tag = soup.select_one("head > title")
    document_title = clean_text(title_tag.get_text()) if title_tag else ""

    return ChapterContent(
        source=source,
        heading=heading,
        document_title=_DOCUMENT_SUFFIX.sub("", document_title),
        paragraphs=tuple(paragraphs),
    )


class ChapterExtractor:
    """Turn the spine of a package into ordered chapters."""

    def __init__(
        self,
        archive: ArchiveIndex,
        package: PackageDocument,
        nav_titles: NavigationMap | None = None,
        settings: ExtractionSettings | None = None,
    ):
        self.archive = archive
        self.package = package
        self.nav_titles = nav_titles or {}
        self.settings = settings or ExtractionSettings()

    def extract(self) -> list[Chapter]:
        """Extract every qualifying spine document, in spine order."""
        chapters: list[Chapter] = []

        for content in self._iter_contents():
            if content.content_length < self.settings.min_content_length:
                log.debug(
                    "Skipping %s: only %d characters of text",
                    content.source,
                    content.content_length,
                )
                continue

            position = len(chapters) + 1
            chapters.append(
                Chapter(
                    id=f"chapter-{position:03d}",
                    title=self._resolve_title(content, position),
                    source=content.source,
                    paragraphs=list(content.paragraphs),
                )
            )

        return chapters

    def _iter_contents(self) -> Iterator[ChapterContent]:
        for idref in self.package.spine:
            item = self.package.item(idref)
            if item is None:
                log.debug("Skipping spine entry %r: not in manifest", idref)
                continue
            if not item.is_document:
                log.debug("Skipping %s: media type %r", item.href, item.media_type)
                continue

            data = self.archive.read(item.href)
            if not data:
                log.debug("Skipping %s: missing or empty", item.href)
                continue

            yield extract_chapter_content(data, item.href)

    def _resolve_title(self, content: ChapterContent, position: int) -> str:
        """Navigation label, heading, <title>, opening words, then 'Section N'."""
        document_title = content.document_title
        if looks_like_generated_title(document_title):
            document_title = ""

        return (
            clean_text(self.nav_titles.get(content.source))
            or content.heading
            or document_title
            or title_from_paragraphs(
                list(content.paragraphs),
                max_length=self.settings.inferred_title_length,
                min_length=self.settings.inferred_title_min_length,
            )
            or f"Section {position}"
        )
