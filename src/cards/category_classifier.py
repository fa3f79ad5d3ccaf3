# src/cards/category_classifier.py

"""Keyword-based product category detection.

A single ordered table drives both card theming and description
emoji/hashtag selection.  The first matching category wins, so order
matters (beauty before tech before fashion, ...).  Keywords are matched
case-insensitively at a word start, which lets plurals and inflections
("dresses", "livros") match while keeping "ring" out of "earring".
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("promo_cards.cards")


class Category(str, Enum):
    """Product categories used for theming."""

    BEAUTY = "beauty"
    TECH = "tech"
    FASHION = "fashion"
    HOME = "home"
    BOOKS = "books"
    ACCESSORIES = "accessories"
    GENERAL = "general"


@dataclass(frozen=True)
class CategoryProfile:
    """Matching keywords plus the text decorations for a category."""

    category: Category
    keywords: tuple[str, ...]
    emojis: str
    hashtags: str

    @property
    def pattern(self) -> re.Pattern[str]:
        return _compiled(self.keywords)


_PATTERN_CACHE: dict[tuple[str, ...], re.Pattern[str]] = {}


def _compiled(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Compile (once) a word-start alternation for ``keywords``."""
    pattern = _PATTERN_CACHE.get(keywords)
    if pattern is None:
        alternation = "|".join(keywords)
        pattern = re.compile(rf"\b(?:{alternation})", re.IGNORECASE)
        _PATTERN_CACHE[keywords] = pattern
    return pattern


CATEGORY_PROFILES: tuple[CategoryProfile, ...] = (
    CategoryProfile(
        Category.BEAUTY,
        (
            "makeup", "lipstick", "blush", "eyeshadow", "cosmetic",
            "perfume", "beauty", "maquiagem", "batom", "sombra",
            "beleza", "cosm[eé]tic",
        ),
        "💄 ✨",
        "#beauty #makeup #deal",
    ),
    CategoryProfile(
        Category.TECH,
        (
            "phone", "smartphone", "iphone", "samsung", "xiaomi",
            "electronic", "gadget", "headset", "headphone", "earbud",
            "notebook", "laptop", "computer", "celular", "eletr[ôo]nic",
            "fone", "telefone", "computador",
        ),
        "📱 💯",
        "#tech #gadget #deal",
    ),
    CategoryProfile(
        Category.FASHION,
        (
            "shirt", "t-shirt", "blouse", "dress", "pants", "fashion",
            "jacket", "shoe", "sneaker", "sandal", "roupa", "camiseta",
            "blusa", "vestido", "cal[çc]a", "moda", "casaco", "jaqueta",
            "sapato", "t[êe]nis", "sand[áa]lia",
        ),
        "👕 👗",
        "#fashion #style #deal",
    ),
    CategoryProfile(
        Category.HOME,
        (
            "home\\b", "kitchen", "decor", "furniture", "utensil",
            "cookware", "casa", "cozinha", "decora[çc][ãa]o",
            "m[óo]veis", "utens[íi]lio", "panela", "fog[ãa]o",
        ),
        "🏠 🍳",
        "#home #kitchen #deal",
    ),
    CategoryProfile(
        Category.BOOKS,
        ("book", "reading", "literature", "novel", "livro", "leitura",
         "literatura"),
        "📚 📖",
        "#books #reading #deal",
    ),
    CategoryProfile(
        Category.ACCESSORIES,
        (
            "jewel", "necklace", "bracelet", "ring", "earring",
            "accessor", "watch", "joia", "colar", "pulseira", "anel",
            "brinco", "acess[óo]rio", "rel[óo]gio",
        ),
        "💍 ✨",
        "#accessories #style #deal",
    ),
)

GENERAL_PROFILE = CategoryProfile(
    Category.GENERAL, (), "🛍️ 🔥", "#deal #shopee"
)

_PROFILES_BY_CATEGORY: dict[Category, CategoryProfile] = {
    p.category: p for p in (*CATEGORY_PROFILES, GENERAL_PROFILE)
}


def classify(product_name: str | None) -> Category:
    """Return the first category whose keywords match ``product_name``."""
    if not product_name or not product_name.strip():
        return Category.GENERAL

    for profile in CATEGORY_PROFILES:
        if profile.pattern.search(product_name):
            logger.debug(
                "Classified '%s' as %s", product_name[:60], profile.category.value
            )
            return profile.category

    return Category.GENERAL


def profile_for(category: Category) -> CategoryProfile:
    """Decorations (emojis, hashtags) for a category."""
    return _PROFILES_BY_CATEGORY[category]
