# src/services/card_service.py

"""Orchestrates description, layout, rendering and packaging for a product."""

import logging
from dataclasses import dataclass, field, replace

from PIL import Image

from src.cards.layout_engine import CardLayoutEngine
from src.config.settings import Settings
from src.errors import EmptyPackageError, ImageUnavailableError
from src.models.card import CardAsset, CardConfig, ImageFormat, Template
from src.models.product import Product
from src.render.card_renderer import CardRenderer
from src.services.description_service import DescriptionService
from src.services.image_fetcher import ImageFetcher
from src.storage.card_packager import (
    build_metadata_text,
    pack,
    package_filename,
)

logger = logging.getLogger("promo_cards.cards")

_FREE_SHIPPING_MARKERS = ("frete grátis", "frete gratis", "free shipping")


def infer_free_shipping(product: Product) -> bool:
    """Guess free shipping when the API does not say.

    Low-confidence heuristic: a marker phrase in the name, or a
    discount above FREE_SHIPPING_DISCOUNT_THRESHOLD.
    """
    name = product.product_name.lower()
    if any(marker in name for marker in _FREE_SHIPPING_MARKERS):
        return True
    return product.discount_rate > Settings.FREE_SHIPPING_DISCOUNT_THRESHOLD


@dataclass
class CardGenerationOptions:
    """Per-request generation knobs with the web app's defaults."""

    use_ai: bool = True
    custom_description: str = ""
    templates: list[str] = field(
        default_factory=lambda: list(Settings.DEFAULT_TEMPLATES)
    )
    formats: list[str] = field(
        default_factory=lambda: [ImageFormat.PNG.value, ImageFormat.JPEG.value]
    )
    use_gradient: bool = True
    custom_colors: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )
    dark_mode: bool = True
    show_shop_name: bool = False


@dataclass
class CardGenerationResult:
    """Container for one product's generated output."""

    product: Product
    description: str = ""
    assets: list[CardAsset] = field(
        default_factory=lambda: list[CardAsset]()
    )
    image_placeholder: bool = False
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def success(self) -> bool:
        return bool(self.assets)


@dataclass
class Download:
    """A single HTTP-ready download."""

    filename: str
    data: bytes
    mime_type: str


class CardService:
    """Turn a product into rendered card variants."""

    def __init__(
        self,
        descriptions: DescriptionService | None = None,
        image_fetcher: ImageFetcher | None = None,
        renderer: CardRenderer | None = None,
    ) -> None:
        self.descriptions = descriptions or DescriptionService()
        self.image_fetcher = image_fetcher or ImageFetcher()
        self.renderer = renderer or CardRenderer()
        self.layout_engine = CardLayoutEngine(self.renderer.surface)

    def _load_image(self, product: Product) -> Image.Image | None:
        try:
            return self.image_fetcher.fetch(product.image_url)
        except ImageUnavailableError as exc:
            logger.warning(
                "Item %s: %s; rendering with placeholder",
                product.item_id,
                exc,
            )
            return None

    def generate(
        self,
        product: Product,
        options: CardGenerationOptions | None = None,
    ) -> CardGenerationResult:
        """Generate every requested template x format for ``product``."""
        opts = options or CardGenerationOptions()
        if product.free_shipping is None:
            product = replace(product, free_shipping=infer_free_shipping(product))

        logger.info(
            "Generating cards for item %s (templates=%s, formats=%s)",
            product.item_id,
            opts.templates,
            opts.formats,
        )

        description = self.descriptions.describe(
            product,
            custom_description=opts.custom_description,
            use_ai=opts.use_ai,
        )
        result = CardGenerationResult(product=product, description=description)

        source = self._load_image(product)
        result.image_placeholder = source is None

        # Repeated names would produce clashing asset names in the package
        templates = list(dict.fromkeys(opts.templates))
        formats = list(dict.fromkeys(opts.formats))
        for template in templates:
            for fmt in formats:
                try:
                    config = CardConfig(
                        template=Template(template),
                        format=ImageFormat(fmt),
                        use_gradient=opts.use_gradient,
                        custom_colors=opts.custom_colors,
                        dark_mode=opts.dark_mode,
                        show_shop_name=opts.show_shop_name,
                    )
                    plan = self.layout_engine.layout(
                        product,
                        description,
                        config,
                        image_available=source is not None,
                    )
                    data = self.renderer.render(plan, config, source)
                except (ValueError, OSError) as exc:
                    message = f"{template}/{fmt}: {exc}"
                    logger.error(
                        "Card render failed for item %s: %s",
                        product.item_id,
                        message,
                        exc_info=True,
                    )
                    result.errors.append(message)
                    continue

                result.assets.append(
                    CardAsset(
                        name=(
                            f"card-{product.item_id or 'item'}-{template}"
                            f".{config.format.extension}"
                        ),
                        data=data,
                        mime_type=config.format.mime_type,
                    )
                )

        logger.info(
            "Item %s: %d cards, %d errors",
            product.item_id,
            len(result.assets),
            len(result.errors),
        )
        return result

    @staticmethod
    def build_download(result: CardGenerationResult) -> Download:
        """One card downloads directly; several are zipped with info.txt.

        Raises:
            EmptyPackageError: the result holds no cards.
        """
        if len(result.assets) == 1:
            asset = result.assets[0]
            return Download(asset.name, asset.data, asset.mime_type)

        try:
            data = pack(
                result.assets,
                build_metadata_text(result.product, result.description),
            )
        except EmptyPackageError:
            logger.error(
                "No cards to package for item %s", result.product.item_id
            )
            raise
        return Download(
            package_filename(result.product), data, "application/zip"
        )
