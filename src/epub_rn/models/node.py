"""Renderable node tree produced from chapter markup."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from epub_rn.models.style import StyleRecord


class TextNode(BaseModel):
    """Run of text, always a leaf."""

    type: Literal["Text"] = "Text"
    content: str
    styles: StyleRecord | None = None


class ContainerNode(BaseModel):
    """Block wrapping an ordered list of child nodes (a ``View``)."""

    type: Literal["View"] = "View"
    children: list["DocumentNode"] = Field(default_factory=list)
    styles: StyleRecord | None = None


class ImageNode(BaseModel):
    """Image leaf; ``source`` is a data URI or the raw ``src`` fallback."""

    type: Literal["Image"] = "Image"
    source: str
    alt: str | None = None
    styles: StyleRecord | None = None


DocumentNode = Annotated[
    Union[TextNode, ContainerNode, ImageNode],
    Field(discriminator="type"),
]

ContainerNode.model_rebuild()
