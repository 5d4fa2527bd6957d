"""Build chapter titles from the navigation document (NCX or EPUB 3 nav)."""

import logging

from epub2json.core.archive import resolve_href
from epub2json.core.text import clean_text
from epub2json.core.xml_reader import (
    XmlElement,
    XmlNode,
    attribute,
    child,
    children,
    full_text,
    iter_elements,
    parse_xml,
    text,
)

log = logging.getLogger(__name__)

# Resolved chapter path -> first label that links to it
NavigationMap = dict[str, str]

# Ruby readings are not part of a label
RUBY_ANNOTATIONS = ("rt", "rp")


def link_label(link: XmlNode | None) -> str:
    """Whole text of a nav link, including inline markup but not ruby readings."""
    return clean_text(full_text(link, skip=RUBY_ANNOTATIONS))


def _record(titles: NavigationMap, nav_path: str, href: str | None, label: str) -> None:
    if not href:
        return
    chapter_path = resolve_href(nav_path, href)
    if label and chapter_path not in titles:
        titles[chapter_path] = label


def _walk_nav_points(points: tuple[XmlNode, ...], nav_path: str, titles: NavigationMap) -> None:
    """Depth-first preorder over nested NCX navPoints."""
    for point in points:
        nav_label = child(point, "navLabel")
        label = text(child(nav_label, "text")) or text(nav_label)
        _record(titles, nav_path, attribute(child(point, "content"), "src"), label)
        _walk_nav_points(children(point, "navPoint"), nav_path, titles)


def _walk_list_items(ol: XmlNode | None, nav_path: str, titles: NavigationMap) -> None:
    """Depth-first preorder over the ol/li tree of an XHTML nav."""
    for item in children(ol, "li"):
        link = child(item, "a")
        _record(titles, nav_path, attribute(link, "href"), link_label(link))
        for nested in children(item, "ol"):
            _walk_list_items(nested, nav_path, titles)


def _toc_nav(doc: XmlNode) -> XmlElement | None:
    navs = list(iter_elements(doc, "nav"))
    for nav in navs:
        if "toc" in (attribute(nav, "type") or "").split():
            return nav
    return navs[0] if navs else None


def parse_navigation(data: bytes, nav_path: str) -> NavigationMap:
    """Map each chapter path referenced by the navigation document to its label.

    The first label seen for a path wins, in document (preorder) order. Entries
    without a usable reference still have their children visited.
    """
    doc = parse_xml(data)
    titles: NavigationMap = {}

    ncx = child(doc, "ncx")
    if ncx is not None:
        _walk_nav_points(children(child(ncx, "navMap"), "navPoint"), nav_path, titles)
    else:
        nav = _toc_nav(doc)
        if nav is None:
            log.debug("No navigation entries found in %s", nav_path)
        for ol in children(nav, "ol"):
            _walk_list_items(ol, nav_path, titles)

    log.debug("Read %d navigation titles from %s", len(titles), nav_path)
    return titles
