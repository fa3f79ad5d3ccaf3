# src/config/settings.py

"""Central configuration for the promo_cards toolkit."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the promo_cards toolkit."""

    # --- Shopee affiliate API ---
    SHOPEE_APP_ID: str = os.getenv("SHOPEE_APP_ID", "")
    SHOPEE_APP_SECRET: str = os.getenv("SHOPEE_APP_SECRET", "")
    SHOPEE_API_URL: str = os.getenv(
        "SHOPEE_AFFILIATE_API_URL",
        "https://open-api.affiliate.shopee.com.br/graphql",
    )
    SHOPEE_PAGE_LIMIT: int = 20          # Products per GraphQL page
    SHOPEE_SORT_BY_SALES: int = 2        # productOfferV2 sortType

    # --- Gemini ---
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com"
    GEMINI_MODELS: list[str] = [
        "gemini-2.0-flash",
        "gemini-1.5-flash",
        "gemini-1.0-flash",
    ]
    GEMINI_TEMPERATURE: float = 0.8
    DESCRIPTION_MAX_LENGTH: int = 300    # Characters requested from the model
    DESCRIPTION_CACHE_TTL: float = 3600.0

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    IMAGE_TIMEOUT: int = 10             # Seconds for product image downloads
    MAX_RETRIES: int = 3                # Retry count on transient failures
    RETRY_DELAY: float = 1.0            # Base seconds between retries

    # --- Resilience ---
    CIRCUIT_BREAKER_THRESHOLD: int = 3  # Consecutive failures to trip
    CIRCUIT_BREAKER_COOLDOWN: float = 60.0

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"

    # --- Cards ---
    CARD_WIDTH: int = 1080
    CARD_HEIGHT: int = 1920
    CARD_MARGIN: int = 40
    JPEG_QUALITY: float = 0.9
    CURRENCY_SYMBOL: str = "R$"
    THOUSANDS_SEPARATOR: str = "."
    FOOTER_TEXT: str = "BUY NOW • LINK IN BIO"
    WATERMARK_TEXT: str = "Made with promo_cards"
    FONT_PATH: str = os.getenv("CARD_FONT_PATH", "DejaVuSans.ttf")
    BOLD_FONT_PATH: str = os.getenv(
        "CARD_BOLD_FONT_PATH", "DejaVuSans-Bold.ttf"
    )
    FREE_SHIPPING_DISCOUNT_THRESHOLD: float = 50.0

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    OUTPUT_DIR: Path = BASE_DIR / "output"
    CACHE_DIR: Path = BASE_DIR / "cache"
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Variations (mirrors the two-card output of the web app) ---
    DEFAULT_TEMPLATES: list[str] = ["modern", "elegant"]
