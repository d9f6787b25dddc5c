"""Conversion settings."""

from dataclasses import dataclass, field
from pathlib import Path

from epub_rn.core.output_writer import OutputWriter


@dataclass
class ConvertConfig:
    """Configuration for the convert command."""

    output_dir: Path = field(default_factory=lambda: Path("."))
    file_name: str = OutputWriter.DEFAULT_FILE_NAME
    indent: int | None = 2
    html_parser: str = "lxml"  # BeautifulSoup tree builder
