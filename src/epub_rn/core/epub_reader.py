"""EPUB container access using ebooklib."""

import logging
import tempfile
import warnings
from pathlib import Path

from ebooklib import epub

from epub_rn.models.book import ManifestEntry, SpineEntry, TOCEntry

log = logging.getLogger(__name__)


class ConversionError(Exception):
    """Raised when the EPUB container cannot be opened or parsed."""

    pass


class EpubReader:
    """Read metadata, reading order and resources from an EPUB."""

    def __init__(self, source: Path | bytes):
        """Open an EPUB from a file path or from its raw bytes.

        Raises:
            ConversionError: If the container cannot be read
        """
        if isinstance(source, (bytes, bytearray)):
            self.name = "<bytes>"
            self.book = self._read_bytes(bytes(source))
            return

        self.name = str(source)
        if not Path(source).exists():
            raise ConversionError(f"File not found: {source}")
        self.book = self._open(str(source))

    def _open(self, path: str) -> epub.EpubBook:
        try:
            with warnings.catch_warnings():
                # ebooklib warns about its own option defaults on every read
                warnings.simplefilter("ignore", UserWarning)
                warnings.simplefilter("ignore", FutureWarning)
                return epub.read_epub(path)
        except Exception as e:
            raise ConversionError(f"Cannot open EPUB {self.name}: {e}") from e

    def _read_bytes(self, data: bytes) -> epub.EpubBook:
        # ebooklib expects a path, so spool the archive to a temporary file
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "book.epub"
            path.write_bytes(data)
            return self._open(str(path))

    def metadata_field(self, name: str) -> str | None:
        """Return the first Dublin Core value for ``name``, if any."""
        values = self.book.get_metadata("DC", name)
        if not values:
            return None
        value = values[0][0]
        return str(value) if value is not None else None

    @property
    def spine(self) -> list[SpineEntry]:
        """Reading order from the spine."""
        entries = []
        for item in self.book.spine:
            idref, linear = item if isinstance(item, tuple) else (item, "yes")
            entries.append(SpineEntry(idref=idref, linear=linear != "no"))
        return entries

    @property
    def toc(self) -> list[TOCEntry]:
        """Table of contents, flattened depth-first."""
        entries: list[TOCEntry] = []
        self._collect_toc(self.book.toc, entries)
        return entries

    def _collect_toc(self, toc_items: list, entries: list[TOCEntry]) -> None:
        """Recursively collect entries from the TOC."""
        for item in toc_items:
            if isinstance(item, tuple):
                # Section with children: (Section, [children])
                section, children = item
                entries.append(
                    TOCEntry(label=section.title or "", content_path=section.href or "")
                )
                self._collect_toc(children, entries)
            else:
                entries.append(
                    TOCEntry(label=item.title or "", content_path=item.href or "")
                )

    @property
    def manifest(self) -> dict[str, ManifestEntry]:
        """Resource id -> path and media type."""
        return {
            item.get_id(): ManifestEntry(
                path=item.get_name(), mime_type=item.media_type or ""
            )
            for item in self.book.get_items()
        }

    def read_bytes(self, resource_id: str) -> bytes | None:
        """Raw bytes of a resource, or None if it can't be read."""
        item = self.book.get_item_with_id(resource_id)
        if item is None:
            log.warning("Resource not found: %s", resource_id)
            return None
        # Raw file content; EpubHtml.get_content() would re-render the page
        return item.content

    def read_text(self, resource_id: str) -> str | None:
        """Resource decoded as UTF-8, or None if missing or undecodable."""
        data = self.read_bytes(resource_id)
        if data is None:
            return None
        if isinstance(data, str):
            return data
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError:
            log.warning("Resource is not valid UTF-8: %s", resource_id)
            return None
