# tests/test_description_generator.py

"""Tests for the template fallback description."""

import random
import unittest

from src.cards.description_generator import (
    CALL_TO_ACTIONS,
    FallbackDescriptionGenerator,
)
from src.cards.layout_engine import CardLayoutEngine
from src.models.card import CardConfig, FontSpec
from src.models.product import Product


class _CharMeasurer:
    def measure_text_width(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size * 0.5


def _product(**overrides: object) -> Product:
    """Fone product with 1234 sales and no rating by default."""
    fields: dict[str, object] = {
        "item_id": "123",
        "product_name": "Fone Bluetooth TWS",
        "price": 89.99,
        "sales": 1234,
    }
    fields.update(overrides)
    return Product(**fields)  # type: ignore[arg-type]


class TestFallbackDescription(unittest.TestCase):
    """FallbackDescriptionGenerator.generate output."""

    def setUp(self) -> None:
        self.generator = FallbackDescriptionGenerator(random.Random(42))

    def test_layout_without_rating(self) -> None:
        """Header, name, price, sales, CTA and hashtags in order."""
        lines = self.generator.generate(_product()).split("\n")
        self.assertEqual(lines[0], "📱 💯 SUPER OFFER! 📱 💯")
        self.assertEqual(lines[2], "Fone Bluetooth TWS")
        self.assertEqual(lines[4], "💰 Only R$89.99")
        self.assertEqual(lines[5], "🛒 1.234 people already bought it!")
        self.assertIn(lines[7], CALL_TO_ACTIONS)
        self.assertEqual(lines[-1], "#tech #gadget #deal #discount #promo")

    def test_no_rating_line_when_unrated(self) -> None:
        """Missing rating means no rating line."""
        text = self.generator.generate(_product())
        self.assertNotIn("Rating", text)

    def test_rating_line(self) -> None:
        """A rating is shown with one decimal."""
        text = self.generator.generate(_product(rating_star=4.8))
        self.assertIn("⭐ Rating: 4.8/5.0", text)

    def test_discount_line(self) -> None:
        """A discount shows both prices."""
        text = self.generator.generate(
            _product(price=90.0, price_discount_rate=10.0)
        )
        self.assertIn("💰 10% OFF! From R$100.00 for only R$90.00", text)

    def test_fractional_discount_matches_card(self) -> None:
        """Description and card badge show the same rounded percent and price."""
        product = _product(price=89.5, price_discount_rate=10.5)
        text = self.generator.generate(product)
        plan = CardLayoutEngine(_CharMeasurer()).layout(
            product, text, CardConfig()
        )
        badge = plan.discount_badge
        assert badge is not None
        self.assertEqual(badge.text, "-11%")
        self.assertEqual(plan.price.original_text, "From R$100.00")
        self.assertIn("💰 11% OFF! From R$100.00 for only R$89.50", text)

    def test_tiny_discount_not_advertised(self) -> None:
        """A rate that rounds to 0% reads as a plain price."""
        text = self.generator.generate(_product(price_discount_rate=0.3))
        self.assertIn("💰 Only R$89.99", text)
        self.assertNotIn("% OFF", text)

    def test_invalid_discount_falls_back(self) -> None:
        """A 100% discount is ignored rather than raising."""
        text = self.generator.generate(
            _product(price_discount_rate=100.0)
        )
        self.assertIn("💰 Only R$89.99", text)

    def test_free_shipping_line(self) -> None:
        """Free shipping adds its own line only when known to be true."""
        with_shipping = self.generator.generate(_product(free_shipping=True))
        unknown = self.generator.generate(_product())
        self.assertIn("FREE SHIPPING", with_shipping)
        self.assertNotIn("FREE SHIPPING", unknown)

    def test_empty_name_uses_placeholder(self) -> None:
        """An empty name renders as "Product" with general decorations."""
        text = self.generator.generate(_product(product_name=""))
        lines = text.split("\n")
        self.assertEqual(lines[2], "Product")
        self.assertTrue(lines[-1].startswith("#deal #shopee"))

    def test_seeded_cta_is_deterministic(self) -> None:
        """Two generators with the same seed pick the same CTA."""
        a = FallbackDescriptionGenerator(random.Random(7))
        b = FallbackDescriptionGenerator(random.Random(7))
        self.assertEqual(a.pick_call_to_action(), b.pick_call_to_action())


if __name__ == "__main__":
    unittest.main()
