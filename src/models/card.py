# src/models/card.py

"""Card configuration, theme colours and the render-agnostic card plan."""

from dataclasses import dataclass, field, replace
from enum import Enum

from PIL import ImageColor

from src.config.settings import Settings
from src.errors import InvalidCardConfigError


class Template(str, Enum):
    """Named visual style presets."""

    MODERN = "modern"
    MINIMAL = "minimal"
    BOLD = "bold"
    ELEGANT = "elegant"
    VIBRANT = "vibrant"
    SEARCH = "search"
    PORTRAIT = "portrait"


class ImageFormat(str, Enum):
    """Output encodings supported by the renderer."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def extension(self) -> str:
        """File extension without the dot."""
        return "png" if self is ImageFormat.PNG else "jpg"

    @property
    def mime_type(self) -> str:
        """MIME type for HTTP responses and archive listings."""
        return f"image/{self.value}"


@dataclass(frozen=True)
class ThemeColors:
    """Category-driven colour trio."""

    primary: str
    accent: str
    background: str

    def merged(self, overrides: dict[str, str] | None) -> "ThemeColors":
        """Return a copy where each provided key wins."""
        if not overrides:
            return self
        known = {
            k: v
            for k, v in overrides.items()
            if k in ("primary", "accent", "background") and v
        }
        return replace(self, **known)


@dataclass(frozen=True)
class CardConfig:
    """Options for a single render call."""

    template: Template = Template.MODERN
    format: ImageFormat = ImageFormat.PNG
    quality: float | None = None
    use_gradient: bool = True
    custom_colors: dict[str, str] = field(
        default_factory=lambda: dict[str, str]()
    )
    dark_mode: bool = True
    show_badges: bool = True
    show_rating: bool = True
    show_shop_name: bool = False
    width: int = Settings.CARD_WIDTH
    height: int = Settings.CARD_HEIGHT

    def __post_init__(self) -> None:
        # Accept plain strings from CLI/JSON input
        if not isinstance(self.template, Template):
            try:
                object.__setattr__(self, "template", Template(self.template))
            except ValueError as exc:
                raise InvalidCardConfigError(
                    f"Unknown template: {self.template!r}"
                ) from exc
        if not isinstance(self.format, ImageFormat):
            try:
                object.__setattr__(self, "format", ImageFormat(self.format))
            except ValueError as exc:
                raise InvalidCardConfigError(
                    f"Unknown format: {self.format!r}"
                ) from exc

        if self.format is ImageFormat.JPEG and self.quality is None:
            object.__setattr__(self, "quality", Settings.JPEG_QUALITY)
        if self.quality is not None and not 0 < self.quality <= 1:
            raise InvalidCardConfigError(
                f"quality must be in (0, 1], got {self.quality}"
            )
        for key, value in self.custom_colors.items():
            if not value:
                continue
            try:
                ImageColor.getrgb(value)
            except ValueError as exc:
                raise InvalidCardConfigError(
                    f"Invalid {key} colour: {value!r}"
                ) from exc
        if self.width <= 0 or self.height <= 0:
            raise InvalidCardConfigError(
                f"Invalid card size {self.width}x{self.height}"
            )

    def with_format(
        self, fmt: ImageFormat, quality: float | None = None
    ) -> "CardConfig":
        """Copy of this config re-targeted at another encoding."""
        return replace(self, format=fmt, quality=quality)


# ── Card plan blocks ─────────────────────────────────────


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle in card pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def right(self) -> int:
        return self.x + self.width


@dataclass(frozen=True)
class FontSpec:
    """Font request passed to the measuring/painting surface."""

    size: int
    bold: bool = False


@dataclass(frozen=True)
class ImageBlock:
    """Where the product photo goes; placeholder when it failed to load."""

    region: Region
    url: str
    placeholder: bool = False


@dataclass(frozen=True)
class TextBlock:
    """Pre-wrapped lines anchored at a top-left point."""

    lines: list[str]
    x: int
    y: int
    font: FontSpec
    line_height: int
    color: str

    @property
    def height(self) -> int:
        return len(self.lines) * self.line_height


@dataclass(frozen=True)
class PriceBlock:
    """Current price and, when discounted, the struck original price."""

    current_text: str
    x: int
    y: int
    current_font: FontSpec
    color: str
    original_text: str | None = None
    original_font: FontSpec | None = None
    original_y: int | None = None
    original_color: str | None = None
    height: int = 0


@dataclass(frozen=True)
class BadgeBlock:
    """Rounded pill overlay (discount or free shipping)."""

    text: str
    region: Region
    font: FontSpec
    background: str
    text_color: str = "#FFFFFF"


@dataclass(frozen=True)
class FooterBlock:
    """Call-to-action bar at the bottom of the card."""

    text: str
    region: Region
    font: FontSpec
    background: str
    text_color: str = "#FFFFFF"


@dataclass(frozen=True)
class CardPlan:
    """Everything a rendering surface needs to paint one card."""

    width: int
    height: int
    template: Template
    preset: str
    colors: ThemeColors
    background: tuple[str, str] | str
    text_color: str
    secondary_text_color: str
    image: ImageBlock
    title: TextBlock
    price: PriceBlock
    badges: list[BadgeBlock] = field(
        default_factory=lambda: list[BadgeBlock]()
    )
    info: TextBlock | None = None
    description: TextBlock | None = None
    footer: FooterBlock | None = None
    watermark: TextBlock | None = None

    @property
    def discount_badge(self) -> BadgeBlock | None:
        """The ``-N%`` badge when present."""
        for badge in self.badges:
            if badge.text.startswith("-") and badge.text.endswith("%"):
                return badge
        return None


@dataclass
class CardAsset:
    """A named, encoded file ready for download or packaging."""

    name: str
    data: bytes
    mime_type: str = "application/octet-stream"
