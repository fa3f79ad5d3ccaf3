# src/storage/file_manager.py

"""Handles saving generated cards, descriptions and packages to disk."""

import json
import logging
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings
from src.models.card import CardAsset
from src.models.product import Product
from src.storage.card_packager import slugify

logger = logging.getLogger("promo_cards.storage")


class FileManager:
    """Writes generation output under ``OUTPUT_DIR``."""

    def __init__(self, output_dir: Path | None = None) -> None:
        self.output_dir: Path = output_dir or Settings.OUTPUT_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, output_dir=%s", self.output_dir)

    def _product_dir(self, product: Product) -> Path:
        """Per-product folder, e.g. ``output/123456_wireless-earbuds``."""
        folder = self.output_dir / (
            f"{product.item_id or 'item'}_{slugify(product.product_name)}"
        )
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def save_asset(self, product: Product, asset: CardAsset) -> Path:
        """Write one card (or any asset) next to its siblings."""
        filepath = self._product_dir(product) / asset.name
        filepath.write_bytes(asset.data)
        logger.info("Saved %s (%d bytes)", filepath, len(asset.data))
        return filepath

    def save_description(self, product: Product, description: str) -> Path:
        """Write the description as a standalone ``.txt`` export."""
        filepath = self._product_dir(product) / f"description-{product.item_id or 'item'}.txt"
        filepath.write_text(description, encoding="utf-8")
        logger.info("Saved description to %s", filepath)
        return filepath

    def save_package(self, product: Product, filename: str, data: bytes) -> Path:
        """Write a zip package into the product folder."""
        filepath = self._product_dir(product) / filename
        filepath.write_bytes(data)
        logger.info("Saved package %s (%d bytes)", filepath, len(data))
        return filepath

    def save_products(self, label: str, products: list[Product]) -> Path:
        """Save a product listing to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{label.replace(' ', '_')}_{timestamp}.json"

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                [p.to_record() for p in products],
                f,
                ensure_ascii=False,
                indent=2,
            )

        logger.info(
            "Saved %d products for '%s' to %s",
            len(products),
            label,
            filepath,
        )
        return filepath
