"""Parse CSS declaration blocks into style records using cssutils."""

import logging
import re
from typing import Callable

import cssutils

from epub_rn.core.units import parse_size
from epub_rn.models.style import StyleRecord

# cssutils reports every property it doesn't validate; EPUB CSS is full of them
cssutils.log.setLevel(logging.CRITICAL)
# Keep hash colors exactly as written (#ff0000, not #f00)
cssutils.ser.prefs.minimizeColorHash = False

log = logging.getLogger(__name__)

_FAMILY_RE = re.compile(r"""\s*(?:"([^"]*)"|'([^']*)'|([^\s,]+))""")


def _text(value: str) -> str | None:
    return value


def _float(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def _int(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


def _font_family(value: str) -> str | None:
    # First family of the list; quoted names may contain spaces
    match = _FAMILY_RE.match(value)
    if match is None:
        return None
    return next(group for group in match.groups() if group is not None) or None


def _decoration(value: str) -> str | None:
    for line in ("underline", "line-through", "none"):
        if line in value:
            return line
    return None


# CSS property -> (StyleRecord field, value converter)
PROPERTY_TABLE: dict[str, tuple[str, Callable[[str], object]]] = {
    # Text
    "font-size": ("font_size", parse_size),
    "font-weight": ("font_weight", _text),
    "font-family": ("font_family", _font_family),
    "font-style": ("font_style", _text),
    "color": ("color", _text),
    "text-align": ("text_align", _text),
    "text-decoration": ("text_decoration_line", _decoration),
    "text-decoration-line": ("text_decoration_line", _decoration),
    "text-transform": ("text_transform", _text),
    "line-height": ("line_height", parse_size),
    "text-indent": ("text_indent", parse_size),
    # Background
    "background-color": ("background_color", _text),
    "opacity": ("opacity", _float),
    # Box model
    "margin-top": ("margin_top", parse_size),
    "margin-bottom": ("margin_bottom", parse_size),
    "margin-left": ("margin_left", parse_size),
    "margin-right": ("margin_right", parse_size),
    "padding-top": ("padding_top", parse_size),
    "padding-bottom": ("padding_bottom", parse_size),
    "padding-left": ("padding_left", parse_size),
    "padding-right": ("padding_right", parse_size),
    # Size
    "width": ("width", parse_size),
    "height": ("height", parse_size),
    "min-width": ("min_width", parse_size),
    "max-width": ("max_width", parse_size),
    "min-height": ("min_height", parse_size),
    "max-height": ("max_height", parse_size),
    # Position
    "position": ("position", _text),
    "top": ("top", parse_size),
    "bottom": ("bottom", parse_size),
    "left": ("left", parse_size),
    "right": ("right", parse_size),
    "z-index": ("z_index", _int),
    # Flexbox
    "display": ("display", _text),
    "flex-direction": ("flex_direction", _text),
    "justify-content": ("justify_content", _text),
    "align-items": ("align_items", _text),
    "align-self": ("align_self", _text),
    "flex-wrap": ("flex_wrap", _text),
    "flex": ("flex", _float),
    "flex-grow": ("flex_grow", _float),
    "flex-shrink": ("flex_shrink", _float),
    "flex-basis": ("flex_basis", parse_size),
    # Border
    "border-width": ("border_width", parse_size),
    "border-top-width": ("border_top_width", parse_size),
    "border-bottom-width": ("border_bottom_width", parse_size),
    "border-left-width": ("border_left_width", parse_size),
    "border-right-width": ("border_right_width", parse_size),
    "border-color": ("border_color", _text),
    "border-top-color": ("border_top_color", _text),
    "border-bottom-color": ("border_bottom_color", _text),
    "border-left-color": ("border_left_color", _text),
    "border-right-color": ("border_right_color", _text),
    "border-radius": ("border_radius", parse_size),
    "border-style": ("border_style", _text),
    # Overflow
    "overflow": ("overflow", _text),
}


def _format_number(number: float) -> str:
    if float(number).is_integer():
        return str(int(number))
    return str(number)


def _value_text(value) -> str | None:
    """Rebuild one cssutils value as a single string, or None to skip it."""
    kind = value.type
    if kind == "IDENT":
        return value.value
    if kind == "STRING":
        return f'"{value.value}"'
    if kind == "NUMBER":
        return _format_number(value.value)
    if kind == "PERCENTAGE":
        return f"{_format_number(value.value)}%"
    if kind == "DIMENSION":
        return f"{_format_number(value.value)}{value.dimension or ''}"
    if kind in ("COLOR_VALUE", "HASH", "FUNCTION", "CALC"):
        return value.cssText
    return None


def parse_declaration(declaration: str) -> tuple[str, str] | None:
    """Split one ``property: value`` declaration into its name and value.

    The value tokens are re-joined with single spaces. Returns None when
    the declaration has no usable name or value.
    """
    if declaration.count(":") != 1:
        return None

    try:
        style = cssutils.parseStyle(declaration)
    except Exception as e:
        log.debug("Skipping declaration %r: %s", declaration, e)
        return None

    for prop in style.getProperties(all=True):
        parts = [
            text
            for text in (_value_text(v) for v in prop.propertyValue)
            if text is not None
        ]
        if parts:
            return prop.name.lower(), " ".join(parts)
    return None


def apply_property(values: dict, name: str, value: str) -> None:
    """Set the style field mapped to CSS property ``name`` (unknown: no-op)."""
    entry = PROPERTY_TABLE.get(name)
    if entry is None:
        return
    field, convert = entry
    converted = convert(value)
    if converted is not None:
        values[field] = converted


def parse_declarations(block: str) -> StyleRecord:
    """Parse a declaration block (``a: 1; b: 2``) into a StyleRecord.

    Unknown properties and malformed declarations are ignored; this never
    raises.
    """
    values: dict = {}
    for segment in block.split(";"):
        segment = segment.strip()
        if not segment:
            continue

        parsed = parse_declaration(segment)
        if parsed is None:
            continue
        name, value = parsed
        apply_property(values, name, value)

    return StyleRecord(**values)
