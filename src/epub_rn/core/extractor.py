"""Assemble the converted book document from an EPUB."""

import base64
import logging
from pathlib import Path

from epub_rn.core.epub_reader import EpubReader
from epub_rn.core.markup import MarkupConverter
from epub_rn.core.stylesheet import default_styles, parse_stylesheet
from epub_rn.models.book import (
    BookDocument,
    BookMetadata,
    BookStructure,
    ChapterDocument,
    ManifestEntry,
)
from epub_rn.models.style import StyleSheet

log = logging.getLogger(__name__)

CSS_MIME_TYPE = "text/css"
CHAPTER_MIME_TYPE = "application/xhtml+xml"
IMAGE_MIME_PREFIX = "image/"

# BookMetadata field -> Dublin Core element
METADATA_FIELDS = {
    "title": "title",
    "author": "creator",
    "language": "language",
    "publisher": "publisher",
    "description": "description",
    "date": "date",
    "identifier": "identifier",
    "rights": "rights",
    "subject": "subject",
}


class EpubExtractor:
    """Convert an opened EPUB into a BookDocument.

    Styles and images are collected before any chapter is converted, and
    are not modified afterwards.
    """

    def __init__(self, reader: EpubReader, html_parser: str = "lxml"):
        self.reader = reader
        self.html_parser = html_parser

    def extract(self) -> BookDocument:
        """Run the full conversion."""
        manifest = self.reader.manifest
        toc = self.reader.toc
        spine = self.reader.spine

        styles = self._extract_styles(manifest)
        images, image_lookup = self._extract_images(manifest)
        chapters = self._extract_chapters(spine, manifest, styles, image_lookup)

        return BookDocument(
            metadata=self._extract_metadata(),
            structure=BookStructure(
                spine_count=len(spine),
                resource_count=len(manifest),
                toc_count=len(toc),
            ),
            toc=toc,
            spine=spine,
            styles=styles,
            images=images,
            chapters=chapters,
        )

    def _extract_metadata(self) -> BookMetadata:
        return BookMetadata(
            **{
                field: self.reader.metadata_field(element)
                for field, element in METADATA_FIELDS.items()
            }
        )

    def _extract_styles(self, manifest: dict[str, ManifestEntry]) -> StyleSheet:
        """Parse every CSS resource into one sheet, later files winning."""
        styles = default_styles()
        for resource_id, entry in manifest.items():
            if entry.mime_type != CSS_MIME_TYPE:
                continue

            css = self.reader.read_text(resource_id)
            if css is None:
                log.warning("Failed to read CSS file: %s", entry.path)
                continue
            if not css.strip():
                log.debug("CSS file is empty: %s", entry.path)
                continue

            before = len(styles)
            styles = parse_stylesheet(css, base=styles)
            log.debug(
                "Parsed %s (%d new style keys)", entry.path, len(styles) - before
            )
        return styles

    def _extract_images(
        self, manifest: dict[str, ManifestEntry]
    ) -> tuple[dict[str, str], dict[str, str]]:
        """Encode images as data URIs.

        Returns the id-keyed map for the output and a lookup additionally
        keyed by manifest path, which is what ``img`` elements reference.
        """
        images: dict[str, str] = {}
        lookup: dict[str, str] = {}
        for resource_id, entry in manifest.items():
            if not entry.mime_type.startswith(IMAGE_MIME_PREFIX):
                continue

            data = self.reader.read_bytes(resource_id)
            if data is None:
                log.warning("Failed to read image: %s", entry.path)
                continue

            encoded = base64.b64encode(data).decode("ascii")
            uri = f"data:{entry.mime_type};base64,{encoded}"
            images[resource_id] = uri
            lookup[entry.path] = uri
            lookup[resource_id] = uri
        return images, lookup

    def _extract_chapters(
        self,
        spine: list,
        manifest: dict[str, ManifestEntry],
        styles: StyleSheet,
        images: dict[str, str],
    ) -> list[ChapterDocument]:
        """Convert every XHTML spine document, in reading order."""
        converter = MarkupConverter(styles, images, parser=self.html_parser)
        chapters = []

        for spine_index, item in enumerate(spine):
            entry = manifest.get(item.idref)
            if entry is None or entry.mime_type != CHAPTER_MIME_TYPE:
                continue

            markup = self.reader.read_text(item.idref)
            if markup is None:
                log.warning("Skipping unreadable chapter: %s", item.idref)
                continue

            try:
                content, title = converter.convert_chapter(markup)
            except Exception as e:
                log.warning("Skipping chapter %s: %s", item.idref, e)
                continue

            chapters.append(
                ChapterDocument(
                    spine_index=spine_index,
                    idref=item.idref,
                    title=title,
                    content=content,
                )
            )

        return chapters


def convert_epub(epub_path: Path, html_parser: str = "lxml") -> BookDocument:
    """Convert the EPUB at ``epub_path``.

    Raises:
        ConversionError: If the container cannot be opened
    """
    return EpubExtractor(EpubReader(epub_path), html_parser).extract()


def convert_epub_bytes(data: bytes, html_parser: str = "lxml") -> BookDocument:
    """Convert an EPUB held in memory."""
    return EpubExtractor(EpubReader(data), html_parser).extract()
