import unittest

from epub_rn.core.stylesheet import (
    DEFAULT_STYLES,
    default_styles,
    extract_rules,
    parse_stylesheet,
    selector_to_key,
)
from epub_rn.models.style import StyleRecord


class SelectorKeyTests(unittest.TestCase):
    def test_normalization(self) -> None:
        self.assertEqual(selector_to_key(".title"), "title")
        self.assertEqual(selector_to_key("#main"), "main")
        self.assertEqual(selector_to_key("div .note"), "div_note")
        self.assertEqual(selector_to_key("  .chapter-title "), "chapter-title")

    def test_compound_selectors_are_not_split(self) -> None:
        self.assertEqual(selector_to_key(".a.b"), "ab")
        self.assertEqual(selector_to_key(".a .b"), "a_b")
        self.assertEqual(selector_to_key(".a, .b"), "a,_b")


class ExtractRulesTests(unittest.TestCase):
    def test_simple_rules(self) -> None:
        rules = extract_rules("h1 { color: red; }\n.note{font-style:italic}")
        self.assertEqual(rules, [("h1", "color: red;"), (".note", "font-style:italic")])

    def test_nested_blocks_do_not_break_following_rules(self) -> None:
        css = "@media screen { p { color: blue } } .after { color: red; }"
        rules = extract_rules(css)
        self.assertEqual(rules[0], ("@media screen", "p { color: blue }"))
        self.assertEqual(rules[1], (".after", "color: red;"))

    def test_braces_inside_strings(self) -> None:
        css = '.quote::before { content: "{"; } .next { color: red; }'
        rules = extract_rules(css)
        self.assertEqual(len(rules), 2)
        self.assertEqual(rules[1], (".next", "color: red;"))

    def test_comments_are_ignored(self) -> None:
        css = "/* } broken { */ p { color: blue; }"
        self.assertEqual(extract_rules(css), [("p", "color: blue;")])

    def test_empty_parts_are_discarded(self) -> None:
        self.assertEqual(extract_rules("{ color: red; } p {  } .x { color: blue }"), [
            (".x", "color: blue")
        ])

    def test_stray_closing_brace(self) -> None:
        self.assertEqual(extract_rules("} p { color: red }"), [("p", "color: red")])


class ParseStylesheetTests(unittest.TestCase):
    def test_defaults_are_seeded(self) -> None:
        styles = parse_stylesheet("")
        for key in ["body", "h1", "h2", "h3", "p", "em", "strong", "blockquote", "center"]:
            self.assertIn(key, styles)
        self.assertEqual(styles["em"], StyleRecord(font_style="italic"))
        self.assertEqual(styles["body"].font_size, 16.0)

    def test_rules_replace_defaults_by_key(self) -> None:
        styles = parse_stylesheet("p { color: blue; }")
        self.assertEqual(styles["p"], StyleRecord(color="blue"))
        self.assertEqual(DEFAULT_STYLES["p"].font_size, 16.0)

    def test_later_rules_win(self) -> None:
        styles = parse_stylesheet(".x { color: red } .x { font-weight: bold }")
        self.assertEqual(styles["x"], StyleRecord(font_weight="bold"))

    def test_rules_without_usable_properties_are_dropped(self) -> None:
        styles = parse_stylesheet(".x { orphans: 2 } p { widows: 2 }")
        self.assertNotIn("x", styles)
        self.assertIs(styles["p"], DEFAULT_STYLES["p"])

    def test_class_and_compound_keys(self) -> None:
        styles = parse_stylesheet(
            ".chapter-title { font-size: 2em; } div .note { margin-top: 4px; }"
        )
        self.assertEqual(styles["chapter-title"].font_size, 32.0)
        self.assertEqual(styles["div_note"].margin_top, 4.0)

    def test_extends_a_base_sheet(self) -> None:
        base = parse_stylesheet(".a { color: red }")
        styles = parse_stylesheet(".b { color: blue }", base=base)
        self.assertEqual(styles["a"].color, "red")
        self.assertEqual(styles["b"].color, "blue")
        self.assertNotIn("b", base)

    def test_default_styles_are_fresh_copies(self) -> None:
        styles = default_styles()
        styles["p"] = StyleRecord()
        self.assertEqual(DEFAULT_STYLES["p"].text_align, "justify")


if __name__ == "__main__":
    unittest.main()
