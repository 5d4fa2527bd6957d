"""Write the extracted book to disk."""

from pathlib import Path

from epub2json.errors import OutputWriteFailure
from epub2json.models.book import Book


class OutputWriter:
    """Write the book document as JSON."""

    def __init__(self, output_path: Path):
        """Initialize output writer.

        Args:
            output_path: JSON file to write; parent directories are created
        """
        self.output_path = output_path

    def write(self, book: Book) -> Path:
        """Serialize the book and write it, replacing any existing file."""
        payload = book.to_json()
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise OutputWriteFailure(
                f"Could not write {self.output_path}: {e}"
            ) from e
        return self.output_path
