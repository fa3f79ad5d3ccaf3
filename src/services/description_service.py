# src/services/description_service.py

"""Product descriptions: AI-generated when possible, template otherwise."""

import logging
from dataclasses import dataclass, field
from enum import Enum

from src.cards.description_generator import FallbackDescriptionGenerator
from src.config.settings import Settings
from src.errors import DescriptionGenerationError
from src.models.product import Product
from src.pricing.price_calculator import format_price
from src.services.gemini_client import GeminiClient
from src.storage.backend import MemoryBackend, StorageBackend

logger = logging.getLogger("promo_cards.descriptions")


class TextTone(str, Enum):
    """Voice requested from the text model."""

    YOUTHFUL = "youthful"
    HUMOROUS = "humorous"
    PERSUASIVE = "persuasive"
    PROFESSIONAL = "professional"
    CASUAL = "casual"


@dataclass(frozen=True)
class DescriptionOptions:
    """Prompt knobs for AI descriptions."""

    tones: tuple[TextTone, ...] = field(
        default=(TextTone.YOUTHFUL, TextTone.PERSUASIVE)
    )
    max_length: int = Settings.DESCRIPTION_MAX_LENGTH
    include_emojis: bool = True
    include_hashtags: bool = True
    highlight_discount: bool = True
    highlight_urgency: bool = True


def build_prompt(product: Product, options: DescriptionOptions) -> str:
    """Creative TikTok-style prompt for one product."""
    facts = [
        f"Product name: {product.product_name}",
        f"Price: {format_price(product.price)}",
    ]
    if product.discount_rate > 0:
        facts.append(f"Discount: {product.discount_rate:g}%")
    if product.shop_name:
        facts.append(f"Shop: {product.shop_name}")

    tone = ", ".join(t.value for t in options.tones) or "youthful, persuasive"
    instructions = [
        f"Use a {tone} tone.",
        "Be creative and original; do not just repeat the facts above.",
        "Do not mention sales numbers or ratings; the card already shows them.",
        "Focus on the benefits and unique features of the product.",
        (
            "Include 3-5 relevant, eye-catching emojis."
            if options.include_emojis
            else "Do not use emojis."
        ),
        (
            "Include 2-3 relevant hashtags."
            if options.include_hashtags
            else "Do not use hashtags."
        ),
    ]
    if options.highlight_discount and product.discount_rate > 0:
        instructions.append("Highlight the discount creatively.")
    if options.highlight_urgency:
        instructions.append("Create a sense of urgency and exclusivity.")
    instructions.append(
        f"Keep the answer under {options.max_length} characters."
    )

    numbered = "\n".join(
        f"{i}. {line}" for i, line in enumerate(instructions, 1)
    )
    return (
        "Write a creative, engaging and original description for a TikTok "
        "post about the following Shopee product:\n\n"
        + "\n".join(facts)
        + "\n\nInstructions:\n"
        + numbered
        + "\n\nAnswer with the description text only, no explanations."
    )


class DescriptionService:
    """Resolve a description for a product.

    Order: caller-supplied text, cached text, Gemini, template fallback.
    Any AI failure degrades to the template; this never raises.
    """

    def __init__(
        self,
        gemini: GeminiClient | None = None,
        fallback: FallbackDescriptionGenerator | None = None,
        cache: StorageBackend | None = None,
        use_ai: bool = True,
    ) -> None:
        self.gemini = gemini if gemini is not None else GeminiClient()
        self.fallback = fallback or FallbackDescriptionGenerator()
        self.cache: StorageBackend = cache or MemoryBackend(
            default_ttl=Settings.DESCRIPTION_CACHE_TTL
        )
        self.use_ai = use_ai

    @staticmethod
    def _cache_key(product: Product) -> str:
        return f"description:{product.item_id}"

    def describe(
        self,
        product: Product,
        custom_description: str | None = None,
        options: DescriptionOptions | None = None,
        use_ai: bool | None = None,
    ) -> str:
        """Resolve the description: custom text, cache, Gemini, then template.

        ``use_ai`` overrides the service default for this call only.
        """
        if use_ai is None:
            use_ai = self.use_ai
        if custom_description and custom_description.strip():
            return custom_description.strip()

        if not (use_ai and self.gemini.configured):
            logger.info(
                "AI descriptions unavailable, using template for item %s",
                product.item_id,
            )
            return self.fallback.generate(product)

        key = self._cache_key(product)
        if product.item_id:
            cached = self.cache.get(key)
            if isinstance(cached, str) and cached:
                logger.info("Description cache hit for item %s", product.item_id)
                return cached

        opts = options or DescriptionOptions()
        try:
            text = self.gemini.generate_content(
                build_prompt(product, opts),
                max_output_tokens=opts.max_length,
            )
        except DescriptionGenerationError as exc:
            logger.warning(
                "AI description failed for item %s, using template: %s",
                product.item_id,
                exc,
            )
            return self.fallback.generate(product)

        if product.item_id:
            self.cache.set(key, text)
        return text
