"""Data models."""

from epub_rn.models.book import (
    BookDocument,
    BookMetadata,
    BookStructure,
    ChapterDocument,
    ManifestEntry,
    SpineEntry,
    TOCEntry,
)
from epub_rn.models.node import (
    ContainerNode,
    DocumentNode,
    ImageNode,
    TextNode,
)
from epub_rn.models.style import (
    TEXT_FIELDS,
    StyleRecord,
    StyleSheet,
    merge_styles,
)

__all__ = [
    # Book models
    "BookMetadata",
    "BookStructure",
    "TOCEntry",
    "SpineEntry",
    "ManifestEntry",
    "ChapterDocument",
    "BookDocument",
    # Node models
    "TextNode",
    "ContainerNode",
    "ImageNode",
    "DocumentNode",
    # Style models
    "TEXT_FIELDS",
    "StyleRecord",
    "StyleSheet",
    "merge_styles",
]
