# src/render/card_renderer.py

"""Pillow rendering surface: measures text and paints a CardPlan."""

import io
import logging
from functools import lru_cache

from PIL import Image, ImageColor, ImageDraw, ImageFont

from src.config.settings import Settings
from src.models.card import (
    CardConfig,
    CardPlan,
    FontSpec,
    ImageBlock,
    ImageFormat,
    Region,
    TextBlock,
)

logger = logging.getLogger("promo_cards.render")

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False) -> FontType:
    """Load the configured TrueType font, falling back to Pillow's default."""
    path = Settings.BOLD_FONT_PATH if bold else Settings.FONT_PATH
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.debug("Font %s not found, using Pillow default", path)
        return ImageFont.load_default(size=size)


def _to_rgb(color: str) -> tuple[int, int, int]:
    """Any CSS colour Pillow understands (hex, short hex, rgb(), names).

    Raises:
        ValueError: the colour cannot be parsed.
    """
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b)


class PillowSurface:
    """Text measurement backed by Pillow font metrics."""

    def measure_text_width(self, text: str, font: FontSpec) -> float:
        return float(load_font(font.size, font.bold).getlength(text))


class CardRenderer:
    """Paint a :class:`CardPlan` and encode it as PNG or JPEG."""

    def __init__(self) -> None:
        self.surface = PillowSurface()

    # ── Painting helpers ─────────────────────────────────

    @staticmethod
    def _paint_background(canvas: Image.Image, plan: CardPlan) -> None:
        draw = ImageDraw.Draw(canvas)
        if isinstance(plan.background, tuple):
            top = _to_rgb(plan.background[0])
            bottom = _to_rgb(plan.background[1])
            span = max(1, plan.height - 1)
            for y in range(plan.height):
                t = y / span
                row = tuple(
                    round(a + (b - a) * t) for a, b in zip(top, bottom)
                )
                draw.line([(0, y), (plan.width, y)], fill=row)
        else:
            draw.rectangle(
                [0, 0, plan.width, plan.height],
                fill=_to_rgb(plan.background),
            )

    @staticmethod
    def _fit_contain(source: Image.Image, region: Region) -> tuple[Image.Image, int, int]:
        """Scale ``source`` to fit ``region`` keeping aspect ratio; centre it."""
        ratio = min(region.width / source.width, region.height / source.height)
        size = (max(1, round(source.width * ratio)), max(1, round(source.height * ratio)))
        resized = source.resize(size, Image.Resampling.LANCZOS)
        x = region.x + (region.width - size[0]) // 2
        y = region.y + (region.height - size[1]) // 2
        return resized, x, y

    def _paint_image(
        self,
        canvas: Image.Image,
        block: ImageBlock,
        source: Image.Image | None,
        plan: CardPlan,
    ) -> None:
        draw = ImageDraw.Draw(canvas)
        region = block.region
        if block.placeholder or source is None:
            # Small cards shrink the inset so the box never inverts
            inset = min(40, region.width // 4, region.height // 4)
            draw.rounded_rectangle(
                [
                    region.x + inset,
                    region.y + inset,
                    region.right - inset,
                    region.bottom - inset,
                ],
                radius=24,
                outline=_to_rgb(plan.secondary_text_color),
                width=4,
            )
            font = load_font(48, bold=True)
            label = "Image unavailable"
            text_w = font.getlength(label)
            draw.text(
                (region.x + (region.width - text_w) / 2, region.y + region.height / 2 - 24),
                label,
                font=font,
                fill=_to_rgb(plan.secondary_text_color),
            )
            return

        resized, x, y = self._fit_contain(source.convert("RGB"), region)
        canvas.paste(resized, (x, y))

    @staticmethod
    def _paint_text(draw: ImageDraw.ImageDraw, block: TextBlock) -> None:
        font = load_font(block.font.size, block.font.bold)
        fill = _to_rgb(block.color)
        for i, line in enumerate(block.lines):
            if line:
                draw.text(
                    (block.x, block.y + i * block.line_height),
                    line,
                    font=font,
                    fill=fill,
                )

    @staticmethod
    def _paint_price(draw: ImageDraw.ImageDraw, plan: CardPlan) -> None:
        block = plan.price
        font = load_font(block.current_font.size, block.current_font.bold)
        draw.text(
            (block.x, block.y),
            block.current_text,
            font=font,
            fill=_to_rgb(block.color),
        )
        if block.original_text and block.original_font and block.original_y is not None:
            small = load_font(block.original_font.size, block.original_font.bold)
            color = _to_rgb(block.original_color or plan.secondary_text_color)
            draw.text(
                (block.x, block.original_y),
                block.original_text,
                font=small,
                fill=color,
            )
            strike_y = block.original_y + block.original_font.size * 0.6
            draw.line(
                [
                    (block.x, strike_y),
                    (block.x + small.getlength(block.original_text), strike_y),
                ],
                fill=color,
                width=2,
            )

    @staticmethod
    def _paint_pill(
        draw: ImageDraw.ImageDraw,
        region: Region,
        text: str,
        font_spec: FontSpec,
        background: str,
        text_color: str,
    ) -> None:
        draw.rounded_rectangle(
            [region.x, region.y, region.right, region.bottom],
            radius=region.height // 2 if region.height < 100 else 16,
            fill=_to_rgb(background),
        )
        font = load_font(font_spec.size, font_spec.bold)
        text_w = font.getlength(text)
        draw.text(
            (
                region.x + (region.width - text_w) / 2,
                region.y + (region.height - font_spec.size) / 2,
            ),
            text,
            font=font,
            fill=_to_rgb(text_color),
        )

    # ── Public API ───────────────────────────────────────

    def paint(
        self,
        plan: CardPlan,
        source_image: Image.Image | None = None,
    ) -> Image.Image:
        """Paint every block of ``plan`` onto a new RGB canvas."""
        canvas = Image.new("RGB", (plan.width, plan.height))
        self._paint_background(canvas, plan)
        self._paint_image(canvas, plan.image, source_image, plan)

        draw = ImageDraw.Draw(canvas)
        for badge in plan.badges:
            self._paint_pill(
                draw, badge.region, badge.text, badge.font,
                badge.background, badge.text_color,
            )
        self._paint_text(draw, plan.title)
        self._paint_price(draw, plan)
        for block in (plan.info, plan.description, plan.watermark):
            if block is not None:
                self._paint_text(draw, block)
        if plan.footer is not None:
            footer = plan.footer
            self._paint_pill(
                draw, footer.region, footer.text, footer.font,
                footer.background, footer.text_color,
            )
        return canvas

    @staticmethod
    def encode(canvas: Image.Image, config: CardConfig) -> bytes:
        """Encode a painted canvas using the config's format and quality."""
        buffer = io.BytesIO()
        if config.format is ImageFormat.JPEG:
            quality = round((config.quality or Settings.JPEG_QUALITY) * 100)
            canvas.convert("RGB").save(buffer, format="JPEG", quality=quality)
        else:
            canvas.save(buffer, format="PNG")
        return buffer.getvalue()

    def render(
        self,
        plan: CardPlan,
        config: CardConfig,
        source_image: Image.Image | None = None,
    ) -> bytes:
        """Paint and encode in one step."""
        data = self.encode(self.paint(plan, source_image), config)
        logger.debug(
            "Rendered %s %s card (%d bytes)",
            plan.template.value,
            config.format.value,
            len(data),
        )
        return data
