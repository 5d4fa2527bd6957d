"""Parse the OPF package document."""

import logging

from epub2json.core.archive import resolve_href
from epub2json.core.xml_reader import XmlNode, attribute, child, children, parse_xml, text
from epub2json.errors import MissingPackageDocument
from epub2json.models.package import ManifestItem, PackageDocument, PackageMetadata

log = logging.getLogger(__name__)


def _first_text(node: XmlNode | None, name: str) -> str:
    """Text of the first ``name`` child that has any."""
    return next((value for sub in children(node, name) if (value := text(sub))), "")


def _parse_metadata(metadata: XmlNode | None) -> PackageMetadata:
    # Creators are kept in document order, duplicates included
    creators = [text(node) for node in children(metadata, "creator")]
    return PackageMetadata(
        title=_first_text(metadata, "title"),
        creators=[c for c in creators if c],
        language=_first_text(metadata, "language"),
    )


def _parse_manifest(manifest: XmlNode | None, package_path: str) -> dict[str, ManifestItem]:
    items: dict[str, ManifestItem] = {}
    for node in children(manifest, "item"):
        item_id = attribute(node, "id")
        href = attribute(node, "href")
        if not item_id or href is None:
            log.debug("Ignoring manifest item without id or href")
            continue
        items[item_id] = ManifestItem(
            id=item_id,
            href=resolve_href(package_path, href),
            media_type=attribute(node, "media-type") or "",
            properties=(attribute(node, "properties") or "").split(),
        )
    return items


def parse_package(data: bytes | None, package_path: str) -> PackageDocument:
    """Extract metadata, manifest and spine from a package document.

    Raises:
        MissingPackageDocument: If there is no content to parse
        MalformedXml: If the document is not well-formed
    """
    if not data:
        raise MissingPackageDocument(
            f'Invalid EPUB: package file "{package_path}" not found'
        )

    package = child(parse_xml(data), "package")
    spine = child(package, "spine")
    idrefs = [attribute(node, "idref") for node in children(spine, "itemref")]

    document = PackageDocument(
        path=package_path,
        metadata=_parse_metadata(child(package, "metadata")),
        manifest=_parse_manifest(child(package, "manifest"), package_path),
        spine=[idref for idref in idrefs if idref],
        toc_id=attribute(spine, "toc") or None,
    )
    log.debug(
        "Parsed package %s: %d manifest items, %d spine entries",
        package_path,
        len(document.manifest),
        len(document.spine),
    )
    return document
