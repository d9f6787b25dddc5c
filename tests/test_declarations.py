import unittest

from epub_rn.core.declarations import parse_declaration, parse_declarations
from epub_rn.models.style import StyleRecord


class ParseDeclarationsTests(unittest.TestCase):
    def test_known_block(self) -> None:
        style = parse_declarations("font-size: 18px; color: #ff0000; font-weight: bold;")
        self.assertEqual(
            style,
            StyleRecord(font_size=18.0, color="#ff0000", font_weight="bold"),
        )
        self.assertEqual(
            style.as_dict(),
            {"font_size": 18.0, "color": "#ff0000", "font_weight": "bold"},
        )

    def test_unknown_properties_are_ignored(self) -> None:
        style = parse_declarations("orphans: 2; widows: 2; color: blue")
        self.assertEqual(style, StyleRecord(color="blue"))

    def test_malformed_declarations_are_skipped(self) -> None:
        style = parse_declarations("font-size 18px; color: red; margin-top: 1px: 2px")
        self.assertEqual(style, StyleRecord(color="red"))

    def test_empty_block(self) -> None:
        self.assertTrue(parse_declarations("").is_empty())
        self.assertTrue(parse_declarations(" ; ;; ").is_empty())

    def test_lengths_are_normalized(self) -> None:
        style = parse_declarations(
            "margin-top: 1em; margin-bottom: 12pt; padding-left: 4px; line-height: 2"
        )
        self.assertEqual(style.margin_top, 16.0)
        self.assertAlmostEqual(style.margin_bottom, 15.96)
        self.assertEqual(style.padding_left, 4.0)
        self.assertEqual(style.line_height, 2.0)

    def test_unparseable_length_leaves_field_unset(self) -> None:
        style = parse_declarations("font-size: large; width: 50%")
        self.assertIsNone(style.font_size)
        self.assertIsNone(style.width)

    def test_font_family_quotes_are_stripped(self) -> None:
        self.assertEqual(
            parse_declarations('font-family: "Palatino"').font_family, "Palatino"
        )
        self.assertEqual(parse_declarations("font-family: Georgia").font_family, "Georgia")

    def test_font_family_takes_first_family(self) -> None:
        self.assertEqual(
            parse_declarations('font-family: "Times New Roman", serif').font_family,
            "Times New Roman",
        )
        self.assertEqual(
            parse_declarations("font-family: Georgia, serif").font_family, "Georgia"
        )

    def test_text_decoration_priority(self) -> None:
        self.assertEqual(
            parse_declarations("text-decoration: underline line-through").text_decoration_line,
            "underline",
        )
        self.assertEqual(
            parse_declarations("text-decoration-line: line-through").text_decoration_line,
            "line-through",
        )
        self.assertEqual(
            parse_declarations("text-decoration: none").text_decoration_line, "none"
        )
        self.assertIsNone(
            parse_declarations("text-decoration: overline").text_decoration_line
        )

    def test_numeric_properties(self) -> None:
        style = parse_declarations("opacity: 0.5; z-index: 10; flex-grow: 2")
        self.assertEqual(style.opacity, 0.5)
        self.assertEqual(style.z_index, 10)
        self.assertEqual(style.flex_grow, 2.0)

    def test_important_flag_is_dropped(self) -> None:
        self.assertEqual(
            parse_declarations("font-weight: bold !important").font_weight, "bold"
        )

    def test_layout_properties(self) -> None:
        style = parse_declarations(
            "display: flex; flex-direction: row; border-left-width: 3px; "
            "border-left-color: #cccccc; overflow: hidden; position: absolute; top: 10px"
        )
        self.assertEqual(style.display, "flex")
        self.assertEqual(style.flex_direction, "row")
        self.assertEqual(style.border_left_width, 3.0)
        self.assertEqual(style.border_left_color, "#cccccc")
        self.assertEqual(style.overflow, "hidden")
        self.assertEqual(style.position, "absolute")
        self.assertEqual(style.top, 10.0)

    def test_function_values_are_kept_whole(self) -> None:
        color = parse_declarations("color: rgb(255, 0, 0)").color
        self.assertIsNotNone(color)
        self.assertTrue(color.startswith("rgb("))
        self.assertTrue(color.endswith(")"))


class ParseDeclarationTests(unittest.TestCase):
    def test_name_and_value(self) -> None:
        self.assertEqual(parse_declaration("font-size: 18px"), ("font-size", "18px"))

    def test_name_is_lower_cased(self) -> None:
        name, _ = parse_declaration("Color: red")
        self.assertEqual(name, "color")

    def test_without_colon(self) -> None:
        self.assertIsNone(parse_declaration("color red"))


if __name__ == "__main__":
    unittest.main()
