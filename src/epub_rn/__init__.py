"""Convert EPUB books into React Native renderable JSON."""

from epub_rn.core.epub_reader import ConversionError
from epub_rn.core.extractor import convert_epub, convert_epub_bytes
from epub_rn.core.output_writer import to_json

__version__ = "0.1.0"

__all__ = [
    "ConversionError",
    "convert_epub",
    "convert_epub_bytes",
    "to_json",
]
