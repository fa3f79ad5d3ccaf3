# src/cards/layout_engine.py

"""Card geometry: turns a product + description into a :class:`CardPlan`.

The engine never paints.  It asks a :class:`TextMeasurer` (the rendering
surface) how wide strings are and returns positioned blocks that any
surface can draw.  Templates map onto a small set of named layout
presets; callers pick a template, never a hand-rolled geometry.

Stacked presets (``standard``, ``fullImage``) put the image on top and
the content column below it; ``split`` puts the image on the left half
and the content column on the right half.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from src.cards.category_classifier import classify
from src.cards.theme_palette import (
    card_background,
    resolve_colors,
    template_style,
)
from src.config.settings import Settings
from src.models.card import (
    BadgeBlock,
    CardConfig,
    CardPlan,
    FontSpec,
    FooterBlock,
    ImageBlock,
    PriceBlock,
    Region,
    Template,
    TextBlock,
)
from src.models.product import Product
from src.pricing.price_calculator import (
    displayed_discount,
    format_count,
    format_price,
)

logger = logging.getLogger("promo_cards.layout")


class TextMeasurer(Protocol):
    """Minimal text-measurement primitive of a rendering surface."""

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        """Width in pixels of ``text`` drawn with ``font``."""
        ...


# ── Presets ──────────────────────────────────────────────


@dataclass(frozen=True)
class LayoutPreset:
    """Proportions of the image region relative to the card."""

    name: str
    image_fraction: float
    side_by_side: bool = False


STANDARD = LayoutPreset("standard", 0.60)
FULL_IMAGE = LayoutPreset("fullImage", 0.70)
SPLIT = LayoutPreset("split", 0.50, side_by_side=True)

LAYOUT_PRESETS: dict[str, LayoutPreset] = {
    p.name: p for p in (STANDARD, FULL_IMAGE, SPLIT)
}


@dataclass(frozen=True)
class TemplateLayout:
    """Which blocks a template shows, and on which preset."""

    preset: LayoutPreset
    show_badges: bool = True
    show_info: bool = True
    show_description: bool = True
    show_footer: bool = True
    show_watermark: bool = True


TEMPLATE_LAYOUTS: dict[Template, TemplateLayout] = {
    Template.MODERN: TemplateLayout(STANDARD),
    Template.MINIMAL: TemplateLayout(
        STANDARD, show_description=False, show_watermark=False
    ),
    Template.BOLD: TemplateLayout(FULL_IMAGE),
    Template.ELEGANT: TemplateLayout(STANDARD, show_badges=False),
    Template.VIBRANT: TemplateLayout(FULL_IMAGE, show_info=False),
    Template.SEARCH: TemplateLayout(SPLIT, show_watermark=False),
    Template.PORTRAIT: TemplateLayout(
        FULL_IMAGE, show_description=False
    ),
}

# Font sizes are for a 1080px-wide card and scale with the card width
_TITLE_SIZES: tuple[int, ...] = (48, 42, 36, 32, 28)
_TITLE_MAX_LINES = 3
_PRICE_SIZE = 72
_ORIGINAL_PRICE_SIZE = 36
_BADGE_SIZE = 32
_INFO_SIZE = 36
_DESCRIPTION_SIZE = 32
_FOOTER_SIZE = 40
_WATERMARK_SIZE = 24
_REFERENCE_WIDTH = 1080
_LINE_SPACING = 1.2

_BADGE_HEIGHT = 60
_BADGE_PADDING = 20
_FOOTER_HEIGHT = 80
_FOOTER_BOTTOM_GAP = 60
_SECTION_GAP = 30


def wrap_text(
    text: str,
    max_width: float,
    font: FontSpec,
    measurer: TextMeasurer,
) -> list[str]:
    """Greedy word wrap.

    Words are accumulated while the line still fits ``max_width``.  A
    word wider than ``max_width`` on its own is placed alone on a line;
    words are never broken.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if not current or measurer.measure_text_width(candidate, font) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def _normalise_description(description: str | None) -> str:
    """Collapse runs of blank lines and trailing whitespace."""
    if not description:
        return ""
    text = re.sub(r"\n{3,}", "\n\n", description.strip())
    return "\n".join(line.rstrip() for line in text.split("\n"))


class CardLayoutEngine:
    """Compute a :class:`CardPlan` for a product, template and config."""

    def __init__(self, measurer: TextMeasurer) -> None:
        self.measurer = measurer

    def _scaled(self, size: int, width: int) -> int:
        return max(10, round(size * width / _REFERENCE_WIDTH))

    @staticmethod
    def _line_height(size: int) -> int:
        return round(size * _LINE_SPACING)

    def _fit_title(
        self,
        title: str,
        max_width: int,
        card_width: int,
    ) -> tuple[list[str], FontSpec]:
        """Largest title size that wraps into at most three lines."""
        lines: list[str] = []
        font = FontSpec(self._scaled(_TITLE_SIZES[-1], card_width), bold=True)
        for size in _TITLE_SIZES:
            font = FontSpec(self._scaled(size, card_width), bold=True)
            lines = wrap_text(title, max_width, font, self.measurer)
            if len(lines) <= _TITLE_MAX_LINES:
                break
        return lines, font

    def _badge(
        self,
        text: str,
        x: int,
        y: int,
        font: FontSpec,
        background: str,
        align_right: bool = False,
    ) -> BadgeBlock:
        width = round(self.measurer.measure_text_width(text, font)) + 2 * _BADGE_PADDING
        left = x - width if align_right else x
        return BadgeBlock(
            text=text,
            region=Region(left, y, width, _BADGE_HEIGHT),
            font=font,
            background=background,
        )

    def layout(
        self,
        product: Product,
        description: str | None,
        config: CardConfig,
        image_available: bool = True,
    ) -> CardPlan:
        """Build the plan.

        ``image_available=False`` (or an empty ``image_url``) yields a
        placeholder image region; the rest of the card is unaffected.
        """
        tpl = TEMPLATE_LAYOUTS[config.template]
        preset = tpl.preset
        width, height = config.width, config.height
        margin = self._scaled(Settings.CARD_MARGIN, width)

        category = classify(product.product_name)
        colors = resolve_colors(category, config.custom_colors)
        style = template_style(config.template, config.dark_mode)

        # Image and content column
        if preset.side_by_side:
            image_width = round(width * preset.image_fraction)
            image_region = Region(0, 0, image_width, height)
            content_x = image_width + margin
            content_width = max(1, width - image_width - 2 * margin)
            y = margin
        else:
            image_region = Region(0, 0, width, round(height * preset.image_fraction))
            content_x = margin
            content_width = max(1, width - 2 * margin)
            y = image_region.bottom + margin

        placeholder = not (image_available and product.image_url)
        if placeholder:
            logger.info(
                "Using image placeholder for item %s", product.item_id
            )
        image = ImageBlock(
            region=image_region, url=product.image_url, placeholder=placeholder
        )

        # Title
        title_lines, title_font = self._fit_title(
            product.product_name or "Product", content_width, width
        )
        title = TextBlock(
            lines=title_lines,
            x=content_x,
            y=y,
            font=title_font,
            line_height=self._line_height(title_font.size),
            color=style.text,
        )
        y = y + title.height + _SECTION_GAP

        # Price
        discount = displayed_discount(product)
        original = discount[1] if discount is not None else None
        price_font = FontSpec(self._scaled(_PRICE_SIZE, width), bold=True)
        price_height = price_font.size
        original_font = original_y = original_text = None
        if original is not None:
            original_font = FontSpec(self._scaled(_ORIGINAL_PRICE_SIZE, width))
            original_y = y + price_font.size + 10
            original_text = f"From {format_price(original)}"
            price_height += 10 + original_font.size
        price = PriceBlock(
            current_text=format_price(product.price),
            x=content_x,
            y=y,
            current_font=price_font,
            color=colors.primary,
            original_text=original_text,
            original_font=original_font,
            original_y=original_y,
            original_color=style.text_secondary if original is not None else None,
            height=price_height,
        )
        y = y + price.height + _SECTION_GAP

        # Badges over the image
        badges: list[BadgeBlock] = []
        if tpl.show_badges and config.show_badges:
            badge_font = FontSpec(self._scaled(_BADGE_SIZE, width), bold=True)
            badge_y = image_region.y + margin
            if discount is not None:
                badges.append(
                    self._badge(
                        f"-{discount[0]}%",
                        image_region.right - margin,
                        badge_y,
                        badge_font,
                        colors.primary,
                        align_right=True,
                    )
                )
            if product.free_shipping is True:
                badges.append(
                    self._badge(
                        "FREE SHIPPING",
                        image_region.x + margin,
                        badge_y,
                        badge_font,
                        style.free_badge,
                    )
                )

        # Rating / sales / shop
        info: TextBlock | None = None
        if tpl.show_info and config.show_rating:
            info_font = FontSpec(self._scaled(_INFO_SIZE, width))
            parts: list[str] = []
            if product.rating_star:
                parts.append(f"⭐ {product.rating_star:.1f}")
            parts.append(f"{format_count(product.sales)} sold")
            info_lines = [" • ".join(parts)]
            if config.show_shop_name and product.shop_name:
                info_lines.append(f"🏪 {product.shop_name}")
            info = TextBlock(
                lines=info_lines,
                x=content_x,
                y=y,
                font=info_font,
                line_height=self._line_height(info_font.size),
                color=style.text_secondary,
            )
            y = y + info.height + _SECTION_GAP

        # Footer and watermark are pinned to the bottom
        footer: FooterBlock | None = None
        content_bottom = height - margin
        if tpl.show_footer:
            footer_y = height - _FOOTER_BOTTOM_GAP - _FOOTER_HEIGHT
            footer = FooterBlock(
                text=Settings.FOOTER_TEXT,
                region=Region(content_x, footer_y, content_width, _FOOTER_HEIGHT),
                font=FontSpec(self._scaled(_FOOTER_SIZE, width), bold=True),
                background=colors.primary,
            )
            content_bottom = footer_y - _SECTION_GAP

        watermark: TextBlock | None = None
        if tpl.show_watermark and not preset.side_by_side:
            wm_font = FontSpec(self._scaled(_WATERMARK_SIZE, width))
            watermark = TextBlock(
                lines=[Settings.WATERMARK_TEXT],
                x=content_x,
                y=height - margin,
                font=wm_font,
                line_height=self._line_height(wm_font.size),
                color=style.text_secondary,
            )

        # Description fills what is left
        desc_block: TextBlock | None = None
        text = _normalise_description(description)
        if tpl.show_description and text:
            desc_font = FontSpec(self._scaled(_DESCRIPTION_SIZE, width))
            line_height = self._line_height(desc_font.size)
            max_lines = max(0, (content_bottom - y) // line_height)
            lines: list[str] = []
            for paragraph in text.split("\n"):
                if not paragraph.strip():
                    lines.append("")
                    continue
                lines.extend(
                    wrap_text(paragraph, content_width, desc_font, self.measurer)
                )
            if len(lines) > max_lines:
                lines = lines[:max_lines]
                while lines and not lines[-1].strip():
                    lines.pop()
                if lines:
                    lines[-1] = lines[-1].rstrip() + " …"
            if lines:
                desc_block = TextBlock(
                    lines=lines,
                    x=content_x,
                    y=y,
                    font=desc_font,
                    line_height=line_height,
                    color=style.text,
                )

        plan = CardPlan(
            width=width,
            height=height,
            template=config.template,
            preset=preset.name,
            colors=colors,
            background=card_background(
                colors, style, config.use_gradient, config.dark_mode
            ),
            text_color=style.text,
            secondary_text_color=style.text_secondary,
            image=image,
            title=title,
            price=price,
            badges=badges,
            info=info,
            description=desc_block,
            footer=footer,
            watermark=watermark,
        )
        logger.debug(
            "Laid out %s card (%s) for item %s: %d title lines, %d badges",
            config.template.value,
            preset.name,
            product.item_id,
            len(title_lines),
            len(badges),
        )
        return plan
