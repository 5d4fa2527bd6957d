"""In-memory index of the files inside an EPUB zip container."""

import io
import posixpath
import zipfile
import zlib
from pathlib import Path
from types import MappingProxyType
from typing import Mapping
from urllib.parse import unquote

from epub2json.errors import CorruptArchive


def normalize_path(path: str) -> str:
    """Normalize an archive path to posix form without a leading './'."""
    path = str(path or "").replace("\\", "/")
    if not path:
        return ""
    normalized = posixpath.normpath(path)
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return "" if normalized == "." else normalized


def resolve_href(base_path: str, href: str) -> str:
    """Resolve an href found in ``base_path`` to an archive path.

    The fragment is dropped and the reference percent-decoded before it is
    joined onto the directory of the base document.
    """
    reference = unquote(str(href or "").split("#", 1)[0])
    return normalize_path(posixpath.join(posixpath.dirname(base_path), reference))


class ArchiveIndex:
    """Read-only mapping of normalized archive paths to file contents."""

    def __init__(self, entries: Mapping[str, bytes]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def open(cls, data: bytes) -> "ArchiveIndex":
        """Index every file in a zip archive given as raw bytes."""
        entries: dict[str, bytes] = {}
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                for info in zf.infolist():
                    if info.is_dir():
                        continue
                    path = normalize_path(info.filename)
                    if path and path not in entries:
                        entries[path] = zf.read(info)
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            EOFError,
            ValueError,
            # Encrypted members and unsupported compression methods
            RuntimeError,
            NotImplementedError,
        ) as e:
            raise CorruptArchive(f"Not a readable EPUB archive: {e}") from e
        return cls(entries)

    @classmethod
    def from_path(cls, path: Path) -> "ArchiveIndex":
        """Index an archive stored on disk."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise CorruptArchive(f"Could not read {path}: {e}") from e
        return cls.open(data)

    def read(self, path: str) -> bytes | None:
        """Return the contents at ``path``, or None if it is not in the archive."""
        return self._entries.get(normalize_path(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def paths(self) -> list[str]:
        return list(self._entries)
