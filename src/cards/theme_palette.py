# src/cards/theme_palette.py

"""Category colour table and per-template text/badge styling."""

from dataclasses import dataclass

from src.cards.category_classifier import Category
from src.models.card import Template, ThemeColors

CATEGORY_COLORS: dict[Category, ThemeColors] = {
    Category.BEAUTY: ThemeColors("#FF6B9D", "#FFC2D1", "#2D1832"),
    Category.TECH: ThemeColors("#00B4DB", "#00DFFC", "#0A1929"),
    Category.FASHION: ThemeColors("#9C27B0", "#E1BEE7", "#1A1A2E"),
    Category.HOME: ThemeColors("#26A69A", "#80CBC4", "#1D2D50"),
    Category.BOOKS: ThemeColors("#FF7043", "#FFAB91", "#2C3E50"),
    Category.ACCESSORIES: ThemeColors("#FFD700", "#FFF59D", "#1F1F1F"),
    Category.GENERAL: ThemeColors("#FF4D4F", "#FFD700", "#0A0A0F"),
}


def get_colors(category: Category) -> ThemeColors:
    """Fixed colour trio for a category."""
    return CATEGORY_COLORS[category]


def resolve_colors(
    category: Category,
    custom_colors: dict[str, str] | None = None,
) -> ThemeColors:
    """Category colours with caller overrides applied key by key."""
    return get_colors(category).merged(custom_colors)


@dataclass(frozen=True)
class TemplateStyle:
    """Text and badge colours that do not depend on the category."""

    text: str
    text_secondary: str
    badge: str
    free_badge: str
    gradient_end: str


_DARK_STYLES: dict[Template, TemplateStyle] = {
    Template.MODERN: TemplateStyle(
        "#FFFFFF", "#CCCCCC", "#FF4D4F", "#00C853", "#1A1A25"
    ),
    Template.MINIMAL: TemplateStyle(
        "#F5F5F7", "#A1A1A6", "#FF3B30", "#34C759", "#1C1C1E"
    ),
    Template.BOLD: TemplateStyle(
        "#FFFFFF", "#A0A0A0", "#FF6B6B", "#4FFFB0", "#1A1A45"
    ),
    Template.ELEGANT: TemplateStyle(
        "#FFFFFF", "#CCCCCC", "#E5B80B", "#00BFA5", "#2C2C2E"
    ),
    Template.VIBRANT: TemplateStyle(
        "#FFFFFF", "#E0E0E0", "#FF4081", "#00E5FF", "#3700B3"
    ),
    Template.SEARCH: TemplateStyle(
        "#FFFFFF", "#CCCCCC", "#FF0055", "#10B981", "#0F0F0F"
    ),
    Template.PORTRAIT: TemplateStyle(
        "#FFFFFF", "#CCCCCC", "#FF007A", "#10B981", "#16213E"
    ),
}

_LIGHT_STYLE = TemplateStyle(
    "#1A1A2E", "#6B7280", "#FF3B30", "#34C759", "#E9ECEF"
)
_LIGHT_BACKGROUND = "#F8F9FA"


def template_style(template: Template, dark_mode: bool = True) -> TemplateStyle:
    """Style record for a template; one shared light variant."""
    if not dark_mode:
        return _LIGHT_STYLE
    return _DARK_STYLES[template]


def card_background(
    colors: ThemeColors,
    style: TemplateStyle,
    use_gradient: bool,
    dark_mode: bool = True,
) -> tuple[str, str] | str:
    """Solid colour or a (top, bottom) vertical gradient."""
    start = colors.background if dark_mode else _LIGHT_BACKGROUND
    if use_gradient:
        return (start, style.gradient_end)
    return start

