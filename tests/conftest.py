from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from epub_factory import build_epub


@pytest.fixture
def write_epub(tmp_path: Path) -> Callable[..., Path]:
    def _write(files: dict[str, str | bytes], name: str = "book.epub", **kwargs) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_epub(files, **kwargs))
        return path

    return _write
