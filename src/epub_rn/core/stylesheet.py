"""Turn raw CSS text into a selector-key -> StyleRecord map."""

import logging
import re
from types import MappingProxyType

from epub_rn.core.declarations import parse_declarations
from epub_rn.models.style import StyleRecord, StyleSheet

log = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)

# Built-in tag styles, sized for a 16pt body
DEFAULT_STYLES = MappingProxyType(
    {
        "body": StyleRecord(
            font_size=16.0,
            font_family="serif",
            color="#000000",
            line_height=1.5,
            padding_left=16.0,
            padding_right=16.0,
            padding_top=16.0,
            padding_bottom=16.0,
        ),
        "h1": StyleRecord(
            font_size=28.0, font_weight="bold", margin_top=24.0, margin_bottom=16.0
        ),
        "h2": StyleRecord(
            font_size=24.0, font_weight="bold", margin_top=20.0, margin_bottom=14.0
        ),
        "h3": StyleRecord(
            font_size=20.0, font_weight="bold", margin_top=16.0, margin_bottom=12.0
        ),
        "p": StyleRecord(font_size=16.0, margin_bottom=12.0, text_align="justify"),
        "em": StyleRecord(font_style="italic"),
        "strong": StyleRecord(font_weight="bold"),
        "blockquote": StyleRecord(
            margin_left=24.0,
            margin_right=24.0,
            margin_top=16.0,
            margin_bottom=16.0,
            padding_left=16.0,
            border_left_width=3.0,
            border_left_color="#cccccc",
            font_style="italic",
        ),
        "center": StyleRecord(text_align="center"),
    }
)


def default_styles() -> StyleSheet:
    """Return a fresh sheet seeded with the built-in tag styles."""
    return dict(DEFAULT_STYLES)


def extract_rules(css: str) -> list[tuple[str, str]]:
    """Split CSS text into ``(selector, declarations)`` pairs.

    Rules are delimited by brace depth, so nested blocks (at-rules) and
    braces inside quoted strings don't break the following rules. Rules with
    an empty selector or empty body are discarded.
    """
    css = _COMMENT_RE.sub("", css)
    rules: list[tuple[str, str]] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escape = False

    for ch in css:
        if quote:
            current.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                quote = None
            continue

        if ch in ("'", '"'):
            quote = ch
            current.append(ch)
        elif ch == "{":
            depth += 1
            current.append(ch)
        elif ch == "}":
            if depth == 0:
                # Stray closing brace outside any rule
                current.clear()
                continue
            depth -= 1
            current.append(ch)
            if depth == 0:
                text = "".join(current)
                current.clear()
                pos = text.find("{")
                selector = text[:pos].strip()
                declarations = text[pos + 1 : -1].strip()
                if selector and declarations:
                    rules.append((selector, declarations))
        else:
            current.append(ch)

    return rules


def selector_to_key(selector: str) -> str:
    """Normalize a selector into a sheet key (``div .note`` -> ``div_note``)."""
    return selector.strip().replace(".", "").replace("#", "").replace(" ", "_")


def parse_stylesheet(css: str, base: StyleSheet | None = None) -> StyleSheet:
    """Parse CSS text into a StyleSheet.

    The sheet starts from ``base`` (or the built-in defaults); parsed rules
    replace entries with the same key, later rules winning. Rules that yield
    no usable property (unknown properties, at-rule bodies) are dropped and
    counted, leaving any existing entry in place.
    """
    styles = dict(base) if base is not None else default_styles()
    rules = extract_rules(css)

    parsed_count = 0
    failed_count = 0
    for selector, declarations in rules:
        style = parse_declarations(declarations)
        if style.is_empty():
            failed_count += 1
            log.debug("Dropping rule %r: no usable declarations", selector)
            continue
        styles[selector_to_key(selector)] = style
        parsed_count += 1

    log.debug(
        "Parsed %d of %d CSS rules (%d failed)",
        parsed_count,
        len(rules),
        failed_count,
    )
    return styles
