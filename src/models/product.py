# src/models/product.py

"""Product data model and the ingress parser for raw affiliate records."""

import logging
import math
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("promo_cards.models")


def _parse_float(value: Any) -> float | None:
    """Parse a decimal-like value, returning None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def _parse_int(value: Any) -> int:
    """Parse an integer-like value (``"1234"``, ``"1,234"``, ``12.0``)."""
    if isinstance(value, str):
        value = value.replace(",", "")
    parsed = _parse_float(value)
    if parsed is None or parsed < 0:
        return 0
    return int(parsed)


def _parse_bool(value: Any) -> bool | None:
    """Map the loose truthy values the API and JSON files use."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    return None


@dataclass
class Product:
    """A single affiliate product offer."""

    item_id: str
    product_name: str
    price: float
    price_discount_rate: float | None = None
    sales: int = 0
    rating_star: float | None = None
    shop_name: str = ""
    image_url: str = ""
    offer_link: str = ""
    free_shipping: bool | None = None

    @property
    def discount_rate(self) -> float:
        """Discount percentage, 0.0 when absent."""
        return self.price_discount_rate or 0.0

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Product":
        """Build a Product from a raw Shopee/JSON record.

        Missing or malformed numeric fields are replaced with defaults
        (price 0.0, sales 0, no discount, no rating) rather than raising.
        """
        item_id = str(record.get("itemId", record.get("item_id", "")) or "")
        name = str(
            record.get("productName", record.get("product_name", "")) or ""
        )

        price = _parse_float(record.get("price"))
        if price is None or price < 0:
            if record.get("price") not in (None, ""):
                logger.warning(
                    "Invalid price %r for item %s, defaulting to 0",
                    record.get("price"),
                    item_id,
                )
            price = 0.0

        discount = _parse_float(
            record.get(
                "priceDiscountRate", record.get("price_discount_rate")
            )
        )
        if discount is not None and discount < 0:
            discount = None

        rating = _parse_float(
            record.get("ratingStar", record.get("rating_star"))
        )
        if rating is not None and not 0 < rating <= 5:
            rating = None

        return cls(
            item_id=item_id,
            product_name=name.strip(),
            price=price,
            price_discount_rate=discount,
            sales=_parse_int(record.get("sales")),
            rating_star=rating,
            shop_name=str(record.get("shopName", record.get("shop_name", "")) or ""),
            image_url=str(record.get("imageUrl", record.get("image_url", "")) or ""),
            offer_link=str(record.get("offerLink", record.get("offer_link", "")) or ""),
            free_shipping=_parse_bool(
                record.get("freeShipping", record.get("free_shipping"))
            ),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialise back to the camelCase shape the API uses."""
        return {
            "itemId": self.item_id,
            "productName": self.product_name,
            "price": f"{self.price:.2f}",
            "priceDiscountRate": (
                None
                if self.price_discount_rate is None
                else f"{self.price_discount_rate:g}"
            ),
            "sales": str(self.sales),
            "ratingStar": (
                None if self.rating_star is None else f"{self.rating_star:.1f}"
            ),
            "shopName": self.shop_name,
            "imageUrl": self.image_url,
            "offerLink": self.offer_link,
            "freeShipping": self.free_shipping,
        }
