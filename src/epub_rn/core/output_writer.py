"""Write converted books as JSON."""

from pathlib import Path

from epub_rn.models.book import BookDocument


def to_json(book: BookDocument, indent: int | None = 2) -> str:
    """Serialize a book, leaving out every unset field."""
    return book.model_dump_json(indent=indent, by_alias=True, exclude_none=True)


def format_file_size(path: Path) -> str:
    """Human readable size of a written file."""
    try:
        size = path.stat().st_size
    except OSError:
        return "Unknown"

    size_kb = size // 1024
    size_mb = size_kb / 1024
    if size_mb > 1.0:
        return f"{size_mb:.1f} MB"
    return f"{size_kb} KB"


class OutputWriter:
    """Write a converted book to the output directory."""

    DEFAULT_FILE_NAME = "book.json"

    def __init__(
        self,
        output_dir: Path,
        file_name: str = DEFAULT_FILE_NAME,
        indent: int | None = 2,
    ):
        """Initialize output writer.

        Args:
            output_dir: Directory to write the JSON file into
            file_name: Name of the JSON file
            indent: JSON indentation, None for compact output
        """
        self.output_dir = output_dir
        self.file_name = file_name
        self.indent = indent

    def write(self, book: BookDocument) -> Path:
        """Write the book and return the path of the JSON file."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / self.file_name
        filepath.write_text(to_json(book, self.indent), encoding="utf-8")
        return filepath
