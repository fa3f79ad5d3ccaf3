# src/filters/product_validator.py

"""Product validation: drop offers that cannot become a card."""

import logging

from src.models.product import Product

logger = logging.getLogger("promo_cards.filters")


class ProductValidator:
    """Validate products and drop those with missing essential fields."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with empty names, zero prices or no item id.

        Returns the valid products and the count of dropped items.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            if not product.product_name.strip():
                logger.debug(
                    "Dropped product with empty name (item=%s)",
                    product.item_id,
                )
                dropped += 1
                continue
            if product.price <= 0:
                logger.debug(
                    "Dropped product with zero price (name=%s, item=%s)",
                    product.product_name,
                    product.item_id,
                )
                dropped += 1
                continue
            if not product.item_id:
                logger.debug(
                    "Dropped product without item id (name=%s)",
                    product.product_name,
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid products",
                dropped,
            )

        return valid, dropped
