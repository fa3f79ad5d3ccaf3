# src/errors.py

"""Exception taxonomy for promo_cards.

Only clearly invalid parameters raise; malformed product data is
defaulted at ingress by :meth:`src.models.product.Product.from_record`.
"""


class PromoCardsError(Exception):
    """Base class for every error raised by promo_cards."""


class InvalidDiscountError(PromoCardsError, ValueError):
    """A discount rate of 100% or more has no finite original price."""

    def __init__(self, discount_rate: float) -> None:
        self.discount_rate = discount_rate
        super().__init__(
            f"Discount rate {discount_rate}% must be below 100%"
        )


class EmptyPackageError(PromoCardsError):
    """Packaging was requested with no assets to bundle."""


class ImageUnavailableError(PromoCardsError):
    """A product image could not be downloaded or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Image unavailable ({reason}): {url}")


class InvalidCardConfigError(PromoCardsError, ValueError):
    """A CardConfig was built with inconsistent options."""


class ShopeeAPIError(PromoCardsError):
    """The Shopee affiliate API rejected a request or returned errors."""


class DescriptionGenerationError(PromoCardsError):
    """Every configured text-generation model failed."""
