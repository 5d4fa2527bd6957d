from __future__ import annotations

import pytest

from epub2json.config import ExtractionSettings
from epub2json.core.archive import ArchiveIndex
from epub2json.core.chapter_extractor import (
    ChapterExtractor,
    clean_text,
    extract_chapter_content,
    looks_like_generated_title,
    title_from_paragraphs,
)
from epub2json.core.package_parser import parse_package

from epub_factory import build_epub, opf, xhtml

PROSE = "吾輩は猫である。名前はまだ無い。どこで生れたかとんと見当がつかぬ。"
XHTML = "application/xhtml+xml"


def _extract(documents: dict[str, str], spine: list[str] | None = None, nav_titles=None, **settings):
    """Run the extractor over chapter documents stored next to the package."""
    items = [(name.split(".")[0], name, XHTML) for name in documents]
    spine = spine if spine is not None else [item_id for item_id, _, _ in items]
    files = {f"OEBPS/{name}": body for name, body in documents.items()}
    files["OEBPS/book.opf"] = opf(items, spine, toc=None)

    archive = ArchiveIndex.open(build_epub(files))
    package = parse_package(archive.read("OEBPS/book.opf"), "OEBPS/book.opf")
    return ChapterExtractor(
        archive, package, nav_titles, ExtractionSettings(**settings)
    ).extract()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  a b  ", "a b"),
        ("line one\nline two", "line one line two"),
        ("a\r\n\r\nb", "a b"),
        ("a\n\n\nb", "a b"),
        ("many     spaces", "many spaces"),
        (None, ""),
    ],
)
def test_clean_text(raw, expected) -> None:
    assert clean_text(raw) == expected


@pytest.mark.parametrize("title", ["Part01", "part0003_split_001", "ch3", "CH12", "id42"])
def test_generated_titles_are_detected(title: str) -> None:
    assert looks_like_generated_title(title)


@pytest.mark.parametrize("title", ["Chapter 3", "ch3 intro", "Idea", "Prologue", ""])
def test_real_titles_are_kept(title: str) -> None:
    assert not looks_like_generated_title(title)


def test_title_from_paragraphs() -> None:
    assert title_from_paragraphs(["短い", "これは二十二文字を超える長い段落なので省略されるはずです"]) == (
        "これは二十二文字を超える長い段落なので省略さ..."
    )
    assert title_from_paragraphs(["six ch"]) == "six ch"
    assert title_from_paragraphs(["short", "tiny"]) == ""
    assert title_from_paragraphs(["abcdefghij"], max_length=4) == "abcd..."


def test_extract_content_strips_ruby_and_scripts() -> None:
    html = xhtml(
        "<h2>第<ruby>一<rp>(</rp><rt>いち</rt><rp>)</rp></ruby>章</h2>"
        "<script>var x = 1;</script><style>p { color: red }</style>"
        "<p><ruby>吾輩<rt>わがはい</rt></ruby>は猫である。</p>"
        "<ul><li>item\n one</li></ul><blockquote>quoted</blockquote><p>  </p>",
        title="chapter.xhtml",
    )

    content = extract_chapter_content(html.encode(), "OEBPS/chapter.xhtml")

    assert content.heading == "第一章"
    assert content.document_title == "chapter"
    assert content.paragraphs == ("吾輩は猫である。", "item one", "quoted")


def test_extract_content_falls_back_to_body_text() -> None:
    content = extract_chapter_content(
        xhtml("<div>first line</div>\n<div>second   line</div>").encode(), "a.xhtml"
    )
    assert content.paragraphs == ("first line second line",)


def test_heading_prefers_h1_over_h2() -> None:
    content = extract_chapter_content(xhtml("<h2>Second</h2><h1>First</h1>").encode(), "a.xhtml")
    assert content.heading == "First"


def test_navigation_title_beats_heading() -> None:
    chapters = _extract(
        {"ch1.xhtml": xhtml(f"<h1>Heading</h1><p>{PROSE}</p>")},
        nav_titles={"OEBPS/ch1.xhtml": "Nav Title"},
    )
    assert chapters[0].title == "Nav Title"


def test_heading_beats_document_title() -> None:
    chapters = _extract({"ch1.xhtml": xhtml(f"<h1>Heading</h1><p>{PROSE}</p>", title="Doc Title")})
    assert chapters[0].title == "Heading"


def test_document_title_used_without_heading() -> None:
    chapters = _extract({"ch1.xhtml": xhtml(f"<p>{PROSE}</p>", title="Prologue.xhtml")})
    assert chapters[0].title == "Prologue"


@pytest.mark.parametrize("generated", ["Part01", "ch3", "id42", "Part0001.xhtml"])
def test_generated_document_title_falls_through(generated: str) -> None:
    chapters = _extract({"ch1.xhtml": xhtml(f"<p>{PROSE}</p>", title=generated)})
    assert chapters[0].title == "吾輩は猫である。名前はまだ無い。どこで生れた..."


def test_positional_title_when_nothing_else_applies() -> None:
    chapters = _extract(
        {
            "a.xhtml": xhtml(f"<h1>Opening</h1><p>{PROSE}</p>"),
            "b.xhtml": xhtml("<p>abcde</p>" * 5),
        }
    )
    assert [c.title for c in chapters] == ["Opening", "Section 2"]


def test_short_chapters_are_dropped_without_consuming_ids() -> None:
    chapters = _extract(
        {
            "cover.xhtml": xhtml("<p>0123456789</p>"),
            "ch1.xhtml": xhtml(f"<p>{PROSE}</p>"),
            "ch2.xhtml": xhtml(f"<p>{PROSE}</p>"),
        }
    )

    assert [c.id for c in chapters] == ["chapter-001", "chapter-002"]
    assert [c.source for c in chapters] == ["OEBPS/ch1.xhtml", "OEBPS/ch2.xhtml"]


def test_content_threshold_is_configurable() -> None:
    documents = {"ch1.xhtml": xhtml("<p>0123456789</p>")}

    assert _extract(documents) == []
    assert len(_extract(documents, min_content_length=10)) == 1


def test_unusable_spine_entries_are_skipped() -> None:
    files = {
        "OEBPS/book.opf": opf(
            [
                ("css", "style.css", "text/css"),
                ("gone", "missing.xhtml", XHTML),
                ("ch1", "ch1.xhtml", XHTML),
            ],
            ["nowhere", "css", "gone", "ch1"],
            toc=None,
        ),
        "OEBPS/style.css": "p { margin: 0 }",
        "OEBPS/ch1.xhtml": xhtml(f"<p>{PROSE}</p>"),
    }
    archive = ArchiveIndex.open(build_epub(files))
    package = parse_package(archive.read("OEBPS/book.opf"), "OEBPS/book.opf")

    chapters = ChapterExtractor(archive, package).extract()

    assert [(c.id, c.source) for c in chapters] == [("chapter-001", "OEBPS/ch1.xhtml")]


def test_plain_html_media_type_is_accepted() -> None:
    files = {
        "OEBPS/book.opf": opf([("ch1", "ch1.html", "TEXT/HTML")], ["ch1"], toc=None),
        "OEBPS/ch1.html": f"<html><body><p>{PROSE}</p></body></html>",
    }
    archive = ArchiveIndex.open(build_epub(files))
    package = parse_package(archive.read("OEBPS/book.opf"), "OEBPS/book.opf")

    assert len(ChapterExtractor(archive, package).extract()) == 1
