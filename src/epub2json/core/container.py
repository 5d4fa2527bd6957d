"""Locate the package document through META-INF/container.xml."""

from epub2json.core.archive import ArchiveIndex
from epub2json.core.xml_reader import attribute, child, parse_xml
from epub2json.errors import MissingContainer, MissingPackagePath

CONTAINER_PATH = "META-INF/container.xml"


def locate_package(archive: ArchiveIndex) -> str:
    """Return the archive path of the first rootfile declared by the container."""
    data = archive.read(CONTAINER_PATH)
    if not data:
        raise MissingContainer(f"Invalid EPUB: {CONTAINER_PATH} not found")

    doc = parse_xml(data)
    rootfile = child(child(child(doc, "container"), "rootfiles"), "rootfile")
    package_path = (attribute(rootfile, "full-path") or "").strip()
    if not package_path:
        raise MissingPackagePath("Invalid EPUB: package rootfile path is missing")
    return package_path
