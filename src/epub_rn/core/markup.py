"""Convert chapter HTML/XHTML into a renderable node tree."""

import warnings
from types import MappingProxyType

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from bs4.element import CData, NavigableString, PreformattedString, Tag

from epub_rn.core.declarations import parse_declarations
from epub_rn.core.stylesheet import DEFAULT_STYLES
from epub_rn.models.node import ContainerNode, DocumentNode, ImageNode, TextNode
from epub_rn.models.style import StyleRecord, StyleSheet, merge_styles

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

NO_CONTENT = "no content"

HEADING_SIZES = MappingProxyType(
    {"h1": 24.0, "h2": 20.0, "h3": 18.0, "h4": 16.0, "h5": 14.0, "h6": 12.0}
)
DEFAULT_HEADING_SIZE = 16.0

# Inline tags: forced style, collapsed into a styled Text when possible
INLINE_OVERRIDES = MappingProxyType(
    {
        "strong": {"font_weight": "bold"},
        "b": {"font_weight": "bold"},
        "em": {"font_style": "italic"},
        "i": {"font_style": "italic"},
        "u": {"text_decoration_line": "underline"},
        "cite": {"font_style": "italic"},
        "code": {"font_family": "monospace", "font_size": 14.0},
        "tt": {"font_family": "monospace", "font_size": 14.0},
        "sup": {"font_size": 12.0},
        "sub": {"font_size": 12.0},
        "small": {"font_size": 12.0},
        "big": {"font_size": 20.0},
    }
)

# Block tags: forced style, always a View
BLOCK_OVERRIDES = MappingProxyType(
    {
        "blockquote": {
            "margin_left": 16.0,
            "margin_right": 16.0,
            "margin_top": 8.0,
            "margin_bottom": 8.0,
            "font_style": "italic",
        },
        "pre": {
            "font_family": "monospace",
            "font_size": 14.0,
            "margin_top": 8.0,
            "margin_bottom": 8.0,
        },
        "center": {"text_align": "center"},
    }
)

PARAGRAPH_MARGIN = 8.0

# Fallback styles for class names common in EPUB markup
DEFAULT_CLASS_STYLES = MappingProxyType(
    {
        "emphasis": StyleRecord(font_style="italic"),
        "strong": StyleRecord(font_weight="bold"),
        "center": StyleRecord(text_align="center"),
        "left": StyleRecord(text_align="left"),
        "right": StyleRecord(text_align="right"),
        "author": StyleRecord(font_weight="normal"),
        "firstname": StyleRecord(font_weight="normal"),
        "surname": StyleRecord(font_weight="normal"),
        "book": StyleRecord(margin_top=16.0, margin_bottom=16.0),
        "chapter": StyleRecord(margin_top=16.0, margin_bottom=16.0),
        "dedication": StyleRecord(
            font_style="italic", text_align="center", margin_top=32.0, margin_bottom=32.0
        ),
        "link": StyleRecord(text_decoration_line="underline"),
        "subtitle": StyleRecord(font_style="italic", font_size=18.0),
        "quote": StyleRecord(font_style="italic", margin_left=16.0, margin_right=16.0),
        "quotation": StyleRecord(
            font_style="italic", margin_left=16.0, margin_right=16.0
        ),
        "note": StyleRecord(font_size=12.0, margin_top=8.0, margin_bottom=8.0),
        "footnote": StyleRecord(font_size=12.0, margin_top=8.0, margin_bottom=8.0),
        "sidebar": StyleRecord(
            margin_left=16.0,
            margin_right=16.0,
            padding_top=8.0,
            padding_bottom=8.0,
            padding_left=8.0,
            padding_right=8.0,
        ),
    }
)

# Never rendered
SKIPPED_TAGS = frozenset({"script", "style"})


def _present(style: StyleRecord | None) -> StyleRecord | None:
    return None if style is None or style.is_empty() else style


def apply_text_style(nodes: list, style: StyleRecord) -> list:
    """Push ``style`` onto every Text leaf below ``nodes``.

    Each leaf keeps its own values where set. Views in between keep their
    own style; Images are left alone.
    """
    styled = []
    for node in nodes:
        if isinstance(node, TextNode):
            node = node.model_copy(update={"styles": merge_styles(style, node.styles)})
        elif isinstance(node, ContainerNode):
            node = node.model_copy(
                update={"children": apply_text_style(node.children, style)}
            )
        styled.append(node)
    return styled


class MarkupConverter:
    """Convert chapter markup into DocumentNode trees.

    The stylesheet and image map are only read, so one converter can be
    shared by every chapter of a book.
    """

    def __init__(
        self,
        styles: StyleSheet,
        images: dict[str, str],
        parser: str = "lxml",
    ):
        self.styles = styles
        self.images = images
        self.parser = parser

    def parse(self, markup: str | bytes) -> BeautifulSoup:
        return BeautifulSoup(markup, self.parser)

    def convert_document(self, markup: str | bytes) -> DocumentNode:
        """Convert a whole document, starting from its body."""
        return self.convert_soup(self.parse(markup))

    def convert_chapter(self, markup: str | bytes) -> tuple[DocumentNode, str | None]:
        """Convert a document and extract its title with a single parse."""
        soup = self.parse(markup)
        return self.convert_soup(soup), self.title_of(soup)

    def convert_soup(self, soup: BeautifulSoup) -> DocumentNode:
        body = soup.find("body")
        if body is not None:
            return self.convert_element(body)

        # No body: convert each top-level html element instead
        roots = soup.find_all("html", recursive=False)
        if not roots:
            return TextNode(content=NO_CONTENT)
        return ContainerNode(children=[self.convert_element(root) for root in roots])

    def extract_title(self, markup: str | bytes) -> str | None:
        """Return the document title, falling back to the first h1."""
        return self.title_of(self.parse(markup))

    @staticmethod
    def title_of(soup: BeautifulSoup) -> str | None:
        for tag in ["title", "h1"]:
            element = soup.find(tag)
            if element:
                text = element.get_text().strip()
                if text:
                    return text
        return None

    def convert_element(self, element: Tag) -> DocumentNode:
        """Convert one element (and its subtree) into a node."""
        tag_name = element.name
        children = self._convert_children(element)
        style = self.resolve_style(element)

        if tag_name == "p":
            return self._paragraph(children, style)
        if tag_name in HEADING_SIZES:
            return self._heading(tag_name, children, style)
        if tag_name == "img":
            return self._image(element, children, style)
        if tag_name in INLINE_OVERRIDES:
            return self._inline(children, style, INLINE_OVERRIDES[tag_name])
        if tag_name in BLOCK_OVERRIDES:
            forced = (style or StyleRecord()).with_values(**BLOCK_OVERRIDES[tag_name])
            return self._block(children, forced)
        return self._block(children, style)

    def _convert_children(self, element: Tag) -> list:
        children = []
        for child in element.children:
            if isinstance(child, Tag):
                if child.name in SKIPPED_TAGS:
                    continue
                children.append(self.convert_element(child))
            elif isinstance(child, NavigableString):
                # Comments, doctypes, processing instructions
                if isinstance(child, PreformattedString) and not isinstance(
                    child, CData
                ):
                    continue
                content = child.strip()
                if content:
                    children.append(TextNode(content=content))
        return children

    # -- style resolution ---------------------------------------------------

    def resolve_style(self, element: Tag) -> StyleRecord | None:
        """Combine tag, class and inline styles (inline wins, tag loses)."""
        inline_style = None
        style_attr = element.get("style")
        if style_attr is not None:
            inline_style = parse_declarations(style_attr)

        class_style = self.resolve_class_style(element.get_attribute_list("class"))
        tag_style = self.resolve_tag_style(element.name)

        return merge_styles(merge_styles(tag_style, class_style), inline_style)

    def resolve_tag_style(self, tag_name: str) -> StyleRecord | None:
        """Style from a book CSS rule for ``tag_name``, if there is one.

        The built-in seeds stay in the sheet for the output but are not
        applied to elements; the per-tag builders set their own defaults.
        """
        style = self.styles.get(tag_name)
        if style is None or style is DEFAULT_STYLES.get(tag_name):
            return None
        return style

    def resolve_class_style(self, class_names: list) -> StyleRecord | None:
        """Find the style for the first class name that matches anything.

        Tries, per class: the exact key, then any compound-selector key
        containing the class, then the built-in generic class styles.
        """
        for class_name in class_names:
            if not class_name:
                continue

            style = self.styles.get(class_name)
            if style is not None:
                return style

            # Compound keys: "toc_toc-title" matches "toc-title",
            # "titlepage_copyright,_legalnotice" matches "copyright".
            # Substring matching can hit unrelated selectors; kept for
            # compatibility with existing output.
            for key, style in self.styles.items():
                if "_" in key and key.endswith(class_name):
                    return style
                if class_name in key and ("_" in key or "," in key):
                    return style

            style = DEFAULT_CLASS_STYLES.get(class_name)
            if style is not None:
                return style
        return None

    def resolve_image(self, src: str) -> str:
        """Map an ``img`` src onto a data URI, or return it unchanged."""
        if src in self.images:
            return self.images[src]

        filename = src.split("/")[-1]
        if filename in self.images:
            return self.images[filename]
        for key, uri in self.images.items():
            if key.split("/")[-1] == filename:
                return uri
        return src

    # -- per-tag builders -----------------------------------------------------

    def _block(self, children: list, style: StyleRecord | None) -> ContainerNode:
        style = _present(style)
        if style is not None:
            text_style = style.text_style()
            if text_style is not None:
                children = apply_text_style(children, text_style)
        return ContainerNode(children=children, styles=style)

    def _paragraph(self, children: list, style: StyleRecord | None) -> ContainerNode:
        style = style or StyleRecord()
        margins = {}
        if style.margin_top is None:
            margins["margin_top"] = PARAGRAPH_MARGIN
        if style.margin_bottom is None:
            margins["margin_bottom"] = PARAGRAPH_MARGIN
        return self._block(children, style.with_values(**margins))

    def _heading(
        self, tag_name: str, children: list, style: StyleRecord | None
    ) -> ContainerNode:
        heading_style = (style or StyleRecord()).with_values(
            font_weight="bold",
            font_size=HEADING_SIZES.get(tag_name, DEFAULT_HEADING_SIZE),
        )
        # Text styling lives on the leaves, the View keeps layout only
        children = apply_text_style(children, heading_style)
        return ContainerNode(children=children, styles=heading_style.layout_style())

    def _image(
        self, element: Tag, children: list, style: StyleRecord | None
    ) -> DocumentNode:
        src = element.get("src")
        if not src:
            return ContainerNode(children=children, styles=_present(style))
        return ImageNode(
            source=self.resolve_image(src),
            alt=element.get("alt"),
            styles=_present(style),
        )

    def _inline(
        self, children: list, style: StyleRecord | None, overrides: dict
    ) -> DocumentNode:
        forced = (style or StyleRecord()).with_values(**overrides)
        styled = apply_text_style(children, forced)

        # A single text child needs no wrapper
        if len(styled) == 1 and isinstance(styled[0], TextNode):
            return styled[0]
        return ContainerNode(children=styled, styles=forced.layout_style())


def convert_document(
    markup: str | bytes,
    styles: StyleSheet,
    images: dict[str, str],
    parser: str = "lxml",
) -> DocumentNode:
    """Convert chapter markup into a node tree."""
    return MarkupConverter(styles, images, parser).convert_document(markup)


def extract_title(markup: str | bytes, parser: str = "lxml") -> str | None:
    """Return the title (or first h1 text) of a document, if any."""
    return MarkupConverter({}, {}, parser).extract_title(markup)
