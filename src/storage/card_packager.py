# src/storage/card_packager.py

"""Bundle rendered cards and a metadata text file into one zip archive."""

import io
import logging
import re
import zipfile

from src.errors import EmptyPackageError
from src.models.card import CardAsset
from src.models.product import Product
from src.pricing.price_calculator import format_count, format_price

logger = logging.getLogger("promo_cards.packager")

METADATA_ENTRY = "info.txt"

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def pack(
    assets: list[CardAsset],
    metadata_text: str,
    metadata_name: str = METADATA_ENTRY,
) -> bytes:
    """Return zip bytes holding every asset plus ``metadata_name``.

    Raises:
        EmptyPackageError: ``assets`` is empty.
        ValueError: two entries would share a name.
    """
    if not assets:
        raise EmptyPackageError("Cannot package zero assets")

    names = [a.name for a in assets] + [metadata_name]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate archive entries: {', '.join(duplicates)}")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for asset in assets:
            zf.writestr(asset.name, asset.data)
        zf.writestr(metadata_name, metadata_text.encode("utf-8"))

    data = buffer.getvalue()
    logger.info(
        "Packaged %d assets + %s (%d bytes)",
        len(assets),
        metadata_name,
        len(data),
    )
    return data


def slugify(text: str, max_length: int = 40) -> str:
    """Lowercase ASCII slug for file names."""
    slug = _SLUG_RE.sub("-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "product"


def package_filename(product: Product) -> str:
    """Download name such as ``cards-123456-wireless-earbuds.zip``."""
    return f"cards-{product.item_id or 'item'}-{slugify(product.product_name)}.zip"


def build_metadata_text(product: Product, description: str) -> str:
    """Product summary plus the description, for the ``info.txt`` entry."""
    lines = [
        f"Product: {product.product_name}",
        f"Item ID: {product.item_id}",
        f"Price: {format_price(product.price)}",
    ]
    if product.discount_rate > 0:
        lines.append(f"Discount: {product.discount_rate:g}%")
    if product.rating_star:
        lines.append(f"Rating: {product.rating_star:.1f}/5.0")
    lines.append(f"Sales: {format_count(product.sales)}")
    if product.shop_name:
        lines.append(f"Shop: {product.shop_name}")
    if product.offer_link:
        lines.append(f"Link: {product.offer_link}")
    lines.extend(["", "Description:", description])
    return "\n".join(lines) + "\n"
