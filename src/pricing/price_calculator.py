# src/pricing/price_calculator.py

"""Original-price derivation from a current price and discount rate."""

import logging
from decimal import ROUND_HALF_UP, Decimal

from src.config.settings import Settings
from src.errors import InvalidDiscountError
from src.models.product import Product

logger = logging.getLogger("promo_cards.pricing")

_CENTS = Decimal("0.01")


def round_currency(value: float) -> float:
    """Round half-up to 2 decimal places (``round()`` is half-even)."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def compute_original_price(
    price: float,
    discount_rate_percent: float,
) -> float | None:
    """Return the pre-discount price, or ``None`` when there is no discount.

    Raises:
        InvalidDiscountError: ``discount_rate_percent`` is 100 or more.
        ValueError: ``price`` is negative.
    """
    if price < 0:
        raise ValueError(f"price must be non-negative, got {price}")
    if discount_rate_percent <= 0:
        return None
    if discount_rate_percent >= 100:
        raise InvalidDiscountError(discount_rate_percent)

    remaining = Decimal(1) - Decimal(str(discount_rate_percent)) / Decimal(100)
    original = Decimal(str(price)) / remaining
    return float(original.quantize(_CENTS, rounding=ROUND_HALF_UP))


def safe_original_price(product: Product) -> float | None:
    """Original price for display; ``None`` on no or invalid discount.

    An invalid discount is logged and suppressed so the card still
    renders without a badge or struck-through price.
    """
    try:
        return compute_original_price(product.price, product.discount_rate)
    except InvalidDiscountError as exc:
        logger.warning(
            "Suppressing discount for item %s: %s", product.item_id, exc
        )
        return None


def display_discount_percent(discount_rate_percent: float) -> int | None:
    """Whole percent shown on cards and descriptions, rounded half-up.

    ``None`` when the rounded value is 0 or 100 or more, so a card never
    advertises "-0%" or "-100%".
    """
    rounded = int(
        Decimal(str(discount_rate_percent)).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )
    )
    if rounded <= 0 or rounded >= 100:
        return None
    return rounded


def displayed_discount(product: Product) -> tuple[int, float] | None:
    """``(percent, original_price)`` as every surface should show them.

    Cards and descriptions both read this, so the badge, the struck
    price and the description text always agree.  ``None`` means no
    discount is shown.
    """
    percent = display_discount_percent(product.discount_rate)
    if percent is None:
        return None
    original = safe_original_price(product)
    if original is None:
        return None
    return percent, original


def format_price(value: float) -> str:
    """Format an amount as ``R$89.99`` (always two decimals)."""
    return f"{Settings.CURRENCY_SYMBOL}{round_currency(value):.2f}"


def format_count(value: int) -> str:
    """Format an integer with the configured thousands separator."""
    return f"{value:,}".replace(",", Settings.THOUSANDS_SEPARATOR)
