"""Data models for the converted book document."""

from pydantic import BaseModel, Field

from epub_rn.models.node import DocumentNode
from epub_rn.models.style import StyleRecord


class BookMetadata(BaseModel):
    """Dublin Core metadata, every field optional."""

    title: str | None = None
    author: str | None = None
    language: str | None = None
    publisher: str | None = None
    description: str | None = None
    date: str | None = None
    identifier: str | None = None
    rights: str | None = None
    subject: str | None = None


class BookStructure(BaseModel):
    """Counts summarizing the container."""

    spine_count: int = 0
    resource_count: int = 0
    toc_count: int = 0


class TOCEntry(BaseModel):
    """Single (flattened) entry in the table of contents."""

    label: str
    content_path: str


class SpineEntry(BaseModel):
    """Reading order entry."""

    idref: str
    id: str | None = None
    properties: str | None = None
    linear: bool = True


class ManifestEntry(BaseModel):
    """Location and media type of one resource in the container."""

    path: str
    mime_type: str


class ChapterDocument(BaseModel):
    """One spine document converted into a node tree."""

    spine_index: int
    idref: str
    title: str | None = None
    content: DocumentNode


class BookDocument(BaseModel):
    """Complete converted book, ready to be written as JSON."""

    metadata: BookMetadata = Field(default_factory=BookMetadata)
    structure: BookStructure = Field(default_factory=BookStructure)
    toc: list[TOCEntry] = Field(default_factory=list)
    spine: list[SpineEntry] = Field(default_factory=list)
    styles: dict[str, StyleRecord] = Field(default_factory=dict)
    images: dict[str, str] = Field(default_factory=dict)
    chapters: list[ChapterDocument] = Field(default_factory=list)
