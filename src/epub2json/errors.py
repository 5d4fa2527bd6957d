"""Exceptions raised while extracting a book."""


class Epub2JsonError(Exception):
    """Base class for all fatal extraction errors."""


class CorruptArchive(Epub2JsonError):
    """The input could not be read as a zip archive."""


class MissingContainer(Epub2JsonError):
    """META-INF/container.xml is absent from the archive."""


class MissingPackagePath(Epub2JsonError):
    """The container document declares no rootfile path."""


class MissingPackageDocument(Epub2JsonError):
    """The package document referenced by the container is missing or empty."""


class MalformedXml(Epub2JsonError):
    """An XML document in the archive could not be parsed."""


class NoInputFound(Epub2JsonError):
    """No single input EPUB could be determined."""


class OutputWriteFailure(Epub2JsonError):
    """The output JSON could not be written."""
