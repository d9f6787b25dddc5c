"""Style record shared by the CSS and markup converters."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Fields a renderer applies to text runs only. Everything else is layout.
TEXT_FIELDS = frozenset(
    {
        "font_size",
        "font_weight",
        "font_family",
        "font_style",
        "color",
        "text_decoration_line",
        "text_transform",
        "line_height",
    }
)


class StyleRecord(BaseModel):
    """Flat set of optional style properties.

    ``None`` means unset. Attributes are snake_case, the serialized keys are
    the camelCase names a React Native style object expects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Text
    font_size: float | None = None
    font_weight: str | None = None
    font_family: str | None = None
    font_style: str | None = None
    color: str | None = None
    text_align: str | None = None
    text_decoration_line: str | None = None
    text_transform: str | None = None
    line_height: float | None = None
    text_indent: float | None = None

    # Background
    background_color: str | None = None
    opacity: float | None = None

    # Box model
    margin_top: float | None = None
    margin_bottom: float | None = None
    margin_left: float | None = None
    margin_right: float | None = None
    padding_top: float | None = None
    padding_bottom: float | None = None
    padding_left: float | None = None
    padding_right: float | None = None

    # Size
    width: float | None = None
    height: float | None = None
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None

    # Position
    position: str | None = None
    top: float | None = None
    bottom: float | None = None
    left: float | None = None
    right: float | None = None
    z_index: int | None = None

    # Flexbox
    display: str | None = None
    flex_direction: str | None = None
    justify_content: str | None = None
    align_items: str | None = None
    align_self: str | None = None
    flex_wrap: str | None = None
    flex: float | None = None
    flex_grow: float | None = None
    flex_shrink: float | None = None
    flex_basis: float | None = None

    # Border
    border_width: float | None = None
    border_top_width: float | None = None
    border_bottom_width: float | None = None
    border_left_width: float | None = None
    border_right_width: float | None = None
    border_color: str | None = None
    border_top_color: str | None = None
    border_bottom_color: str | None = None
    border_left_color: str | None = None
    border_right_color: str | None = None
    border_radius: float | None = None
    border_style: str | None = None

    overflow: str | None = None

    def as_dict(self) -> dict:
        """Return only the fields that are set, keyed by attribute name."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.as_dict()

    def with_values(self, **values) -> "StyleRecord":
        """Return a copy with the given fields forced to new values."""
        return self.model_copy(update=values)

    def text_style(self) -> "StyleRecord | None":
        """Return the text-affecting subset, or None if nothing is set."""
        subset = {k: v for k, v in self.as_dict().items() if k in TEXT_FIELDS}
        return StyleRecord(**subset) if subset else None

    def layout_style(self) -> "StyleRecord | None":
        """Return everything except the text-affecting fields, or None."""
        subset = {k: v for k, v in self.as_dict().items() if k not in TEXT_FIELDS}
        return StyleRecord(**subset) if subset else None


def merge_styles(
    base: StyleRecord | None, override: StyleRecord | None
) -> StyleRecord | None:
    """Merge two style records field by field.

    A field set on ``override`` always wins; otherwise the ``base`` value is
    kept. Used as ``merge_styles(class_style, inline_style)``.
    """
    if base is None:
        return override
    if override is None:
        return base

    merged = base.as_dict()
    merged.update(override.as_dict())
    return StyleRecord(**merged)


# Selector key -> style record
StyleSheet = dict[str, StyleRecord]
