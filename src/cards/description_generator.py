# src/cards/description_generator.py

"""Template-based promotional text used when no AI description is available."""

import logging
import random

from src.cards.category_classifier import classify, profile_for
from src.models.product import Product
from src.pricing.price_calculator import (
    displayed_discount,
    format_count,
    format_price,
)

logger = logging.getLogger("promo_cards.descriptions")

CALL_TO_ACTIONS: tuple[str, ...] = (
    "HURRY, IT'S SELLING OUT! 🏃‍♂️",
    "DON'T MISS THIS CHANCE! ⏰",
    "GRAB YOURS NOW! 👆",
    "ENJOY IT WHILE IT LASTS! ⚡",
    "LIMITED-TIME OFFER! ⏱️",
    "TAP THE LINK AND GET IT! 🔗",
    "LAST UNITS LEFT! 🔥",
)

TRAILING_HASHTAGS = "#discount #promo"


class FallbackDescriptionGenerator:
    """Compose a fixed-layout blurb from product fields.

    The call-to-action is drawn from :data:`CALL_TO_ACTIONS` using the
    injected ``rng`` so callers (and tests) can seed it.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def pick_call_to_action(self) -> str:
        return self._rng.choice(CALL_TO_ACTIONS)

    def _price_line(self, product: Product) -> str:
        price_text = format_price(product.price)
        discount = displayed_discount(product)
        if discount is None:
            return f"💰 Only {price_text}"
        percent, original = discount
        return (
            f"💰 {percent}% OFF! From {format_price(original)} "
            f"for only {price_text}"
        )

    def generate(self, product: Product) -> str:
        """Build the description; never raises for product data."""
        name = product.product_name or "Product"
        profile = profile_for(classify(product.product_name))

        lines: list[str] = [
            f"{profile.emojis} SUPER OFFER! {profile.emojis}",
            "",
            name,
            "",
            self._price_line(product),
        ]

        if product.rating_star:
            lines.append(f"⭐ Rating: {product.rating_star:.1f}/5.0")

        lines.append(
            f"🛒 {format_count(product.sales)} people already bought it!"
        )

        if product.free_shipping is True:
            lines.append("✅ FREE SHIPPING nationwide!")

        lines.extend(
            [
                "",
                self.pick_call_to_action(),
                "",
                f"{profile.hashtags} {TRAILING_HASHTAGS}",
            ]
        )

        description = "\n".join(lines)
        logger.debug(
            "Fallback description for item %s (%d chars)",
            product.item_id,
            len(description),
        )
        return description
