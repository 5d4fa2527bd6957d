"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from epub2json.config import ExtractionSettings
from epub2json.core.book_assembler import extract_book
from epub2json.core.output_writer import OutputWriter
from epub2json.errors import Epub2JsonError, NoInputFound

DEFAULT_BOOKS_DIR = Path("books")
DEFAULT_OUTPUT_PATH = Path("public") / "data" / "book.json"

app = typer.Typer(
    name="epub2json",
    help="Extract the chapters of an EPUB into a single JSON document.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def find_default_epub(books_dir: Path) -> Path:
    """Return the only .epub file in ``books_dir``.

    Raises:
        NoInputFound: If the directory holds no .epub file or more than one
    """
    candidates = (
        sorted(p for p in books_dir.iterdir() if p.is_file() and p.suffix.lower() == ".epub")
        if books_dir.is_dir()
        else []
    )
    if not candidates:
        raise NoInputFound(f"No .epub file found in {books_dir}")
    if len(candidates) > 1:
        names = ", ".join(p.name for p in candidates)
        raise NoInputFound(
            f"Multiple .epub files found in {books_dir} ({names}); pass one explicitly"
        )
    return candidates[0]


@app.command()
def main(
    epub_path: Annotated[
        Optional[Path],
        typer.Argument(
            help="EPUB file to extract (default: the only .epub in the books directory)",
            dir_okay=False,
        ),
    ] = None,
    output_path: Annotated[
        Path,
        typer.Argument(
            help="Where to write the book JSON",
            dir_okay=False,
        ),
    ] = DEFAULT_OUTPUT_PATH,
    books_dir: Annotated[
        Path,
        typer.Option(
            "--books-dir",
            "-b",
            help="Directory searched when no EPUB path is given",
            file_okay=False,
        ),
    ] = DEFAULT_BOOKS_DIR,
    min_content_length: Annotated[
        int,
        typer.Option(
            "--min-content-length",
            help="Drop chapters with fewer characters of text than this",
            min=0,
        ),
    ] = ExtractionSettings().min_content_length,
    title_length: Annotated[
        int,
        typer.Option(
            "--title-length",
            help="Maximum length of titles inferred from the first paragraph",
            min=1,
        ),
    ] = ExtractionSettings().inferred_title_length,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log skipped chapters and other details",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress the summary line",
        ),
    ] = False,
) -> None:
    """Extract an EPUB's chapters into a single JSON document."""
    configure_logging(verbose)
    settings = ExtractionSettings(
        min_content_length=min_content_length,
        inferred_title_length=title_length,
    )

    try:
        if epub_path is None:
            epub_path = find_default_epub(books_dir)
        epub_path = epub_path.resolve()
        if not epub_path.is_file():
            raise NoInputFound(f"EPUB file not found: {epub_path}")

        book = extract_book(epub_path, settings)
        written = OutputWriter(output_path.resolve()).write(book)
    except Epub2JsonError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)

    if not quiet:
        console.print(
            f"[bold]{escape(book.title)}[/] [dim]-[/] {book.chapter_count} chapters "
            f"[dim]->[/] {written}",
            highlight=False,
            soft_wrap=True,
        )


if __name__ == "__main__":
    app()
