# src/scrapers/shopee_client.py

"""Shopee affiliate GraphQL client (productOfferV2)."""

import hashlib
import json
import time
from typing import Any

from src.errors import ShopeeAPIError
from src.filters.product_validator import ProductValidator
from src.models.product import Product
from src.scrapers.base_client import BaseClient

_PRODUCT_FIELDS = """
      itemId
      productName
      commissionRate
      price
      priceDiscountRate
      sales
      imageUrl
      shopName
      offerLink
      ratingStar
"""

PRODUCTS_QUERY = (
    "query GetProducts($page: Int!, $limit: Int!, $sortType: Int, "
    "$keyword: String) {\n"
    "  productOfferV2(page: $page, limit: $limit, sortType: $sortType, "
    "keyword: $keyword) {\n"
    "    nodes {" + _PRODUCT_FIELDS + "    }\n"
    "  }\n"
    "}"
)

PRODUCT_QUERY = (
    "query GetProduct($itemId: Int64) {\n"
    "  productOfferV2(itemId: $itemId, limit: 1) {\n"
    "    nodes {" + _PRODUCT_FIELDS + "    }\n"
    "  }\n"
    "}"
)


def build_signature(
    app_id: str, timestamp: int, payload: str, secret: str
) -> str:
    """SHA256 hex of ``app_id + timestamp + payload + secret``."""
    base = f"{app_id}{timestamp}{payload}{secret}"
    return hashlib.sha256(base.encode("utf-8")).hexdigest()


class ShopeeClient(BaseClient):
    """Signed GraphQL client for the Shopee affiliate open API."""

    def __init__(
        self,
        app_id: str | None = None,
        app_secret: str | None = None,
        api_url: str | None = None,
    ) -> None:
        super().__init__("shopee")
        self.app_id = app_id if app_id is not None else self.settings.SHOPEE_APP_ID
        self.app_secret = (
            app_secret if app_secret is not None else self.settings.SHOPEE_APP_SECRET
        )
        self.api_url = api_url or self.settings.SHOPEE_API_URL

    @property
    def configured(self) -> bool:
        return bool(self.app_id and self.app_secret and self.api_url)

    def _auth_header(self, timestamp: int, payload: str) -> str:
        signature = build_signature(
            self.app_id, timestamp, payload, self.app_secret
        )
        # No spaces after the commas
        return (
            f"SHA256 Credential={self.app_id},"
            f"Timestamp={timestamp},Signature={signature}"
        )

    def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a signed query and return its ``data`` object."""
        if not self.configured:
            raise ShopeeAPIError(
                "Shopee API not configured: set SHOPEE_APP_ID, "
                "SHOPEE_APP_SECRET and SHOPEE_AFFILIATE_API_URL"
            )

        # The signature covers the exact bytes sent
        payload = json.dumps(
            {"query": query, "variables": variables}, separators=(",", ":")
        )
        timestamp = int(time.time())
        headers = {
            "Content-Type": "application/json",
            "Authorization": self._auth_header(timestamp, payload),
        }
        self.logger.debug("GraphQL variables: %s", variables)

        resp = self._fetch_post(self.api_url, headers, payload)
        if resp is None:
            raise ShopeeAPIError("Shopee API unreachable")
        if resp.status_code != 200:
            raise ShopeeAPIError(
                f"Shopee API returned HTTP {resp.status_code}: {resp.text[:200]}"
            )

        try:
            body: dict[str, Any] = resp.json()
        except ValueError as exc:
            raise ShopeeAPIError("Shopee API returned invalid JSON") from exc

        errors = body.get("errors")
        if errors:
            message = ", ".join(
                str(e.get("message", e)) for e in errors if isinstance(e, dict)
            ) or str(errors)
            raise ShopeeAPIError(f"Shopee API error: {message}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise ShopeeAPIError("Shopee API response has no data")
        return data

    @staticmethod
    def _nodes(data: dict[str, Any]) -> list[dict[str, Any]]:
        offer = data.get("productOfferV2") or {}
        nodes = offer.get("nodes") or []
        return [n for n in nodes if isinstance(n, dict)]

    def get_products(
        self,
        page: int = 1,
        limit: int | None = None,
        sort_type: int = 1,
        keyword: str | None = None,
    ) -> list[Product]:
        """Fetch one page of product offers as validated Products."""
        variables: dict[str, Any] = {
            "page": page,
            "limit": limit or self.settings.SHOPEE_PAGE_LIMIT,
            "sortType": sort_type,
        }
        if keyword:
            variables["keyword"] = keyword

        data = self._graphql(PRODUCTS_QUERY, variables)
        products = [Product.from_record(n) for n in self._nodes(data)]
        valid, dropped = ProductValidator.validate(products)
        self.logger.info(
            "Fetched %d products (page=%d, sort=%d, dropped=%d)",
            len(valid),
            page,
            sort_type,
            dropped,
        )
        return valid

    def get_best_sellers(self, limit: int = 20) -> list[Product]:
        """Top sellers, sorted by sales."""
        return self.get_products(
            page=1, limit=limit, sort_type=self.settings.SHOPEE_SORT_BY_SALES
        )

    def get_product(self, item_id: str) -> Product | None:
        """Look up a single offer by item id."""
        try:
            numeric_id = int(item_id)
        except ValueError as exc:
            raise ShopeeAPIError(f"Invalid item id: {item_id!r}") from exc

        data = self._graphql(PRODUCT_QUERY, {"itemId": numeric_id})
        nodes = self._nodes(data)
        if not nodes:
            self.logger.warning("Item %s not found", item_id)
            return None
        return Product.from_record(nodes[0])
