# tests/test_theme_palette.py

"""Tests for category colours and template styling."""

import unittest

from src.cards.category_classifier import Category
from src.cards.theme_palette import (
    CATEGORY_COLORS,
    card_background,
    get_colors,
    resolve_colors,
    template_style,
)
from src.models.card import Template


class TestCategoryColors(unittest.TestCase):
    """Colour trio lookup and overrides."""

    def test_every_category_has_colors(self) -> None:
        """No category is missing from the table."""
        for category in Category:
            with self.subTest(category=category):
                self.assertIn(category, CATEGORY_COLORS)

    def test_tech_colors(self) -> None:
        """Tech uses the cyan palette."""
        colors = get_colors(Category.TECH)
        self.assertEqual(colors.primary, "#00B4DB")
        self.assertEqual(colors.background, "#0A1929")

    def test_custom_colors_override_per_key(self) -> None:
        """Only the provided keys are replaced."""
        colors = resolve_colors(Category.GENERAL, {"primary": "#123456"})
        self.assertEqual(colors.primary, "#123456")
        self.assertEqual(colors.accent, get_colors(Category.GENERAL).accent)

    def test_unknown_and_empty_overrides_ignored(self) -> None:
        """Unknown keys and empty values leave the palette intact."""
        base = get_colors(Category.BEAUTY)
        colors = resolve_colors(
            Category.BEAUTY, {"border": "#000000", "accent": ""}
        )
        self.assertEqual(colors, base)


class TestTemplateStyle(unittest.TestCase):
    """Per-template styles and backgrounds."""

    def test_every_template_has_dark_style(self) -> None:
        """Each template resolves a dark style."""
        for template in Template:
            with self.subTest(template=template):
                self.assertTrue(template_style(template).text.startswith("#"))

    def test_light_mode_shared_style(self) -> None:
        """Light mode uses one style for every template."""
        self.assertEqual(
            template_style(Template.MODERN, dark_mode=False),
            template_style(Template.BOLD, dark_mode=False),
        )

    def test_gradient_background_is_tuple(self) -> None:
        """Gradients start from the category background."""
        colors = get_colors(Category.TECH)
        style = template_style(Template.MODERN)
        background = card_background(colors, style, use_gradient=True)
        self.assertEqual(background, ("#0A1929", style.gradient_end))

    def test_solid_background(self) -> None:
        """Without a gradient the background is a single colour."""
        colors = get_colors(Category.TECH)
        style = template_style(Template.MODERN)
        self.assertEqual(
            card_background(colors, style, use_gradient=False), "#0A1929"
        )

    def test_light_background_ignores_category(self) -> None:
        """Light mode paints a light background."""
        colors = get_colors(Category.TECH)
        style = template_style(Template.MODERN, dark_mode=False)
        background = card_background(
            colors, style, use_gradient=False, dark_mode=False
        )
        self.assertNotEqual(background, colors.background)


if __name__ == "__main__":
    unittest.main()
