# tests/test_product_model.py

"""Tests for the Product dataclass and its record parser."""

import unittest

from src.models.product import Product


class TestProductModel(unittest.TestCase):
    """Product dataclass unit tests."""

    def test_defaults(self) -> None:
        """Optional fields default to expected values."""
        product = Product(item_id="1", product_name="X", price=1.0)
        self.assertIsNone(product.price_discount_rate)
        self.assertEqual(product.sales, 0)
        self.assertIsNone(product.rating_star)
        self.assertEqual(product.shop_name, "")
        self.assertEqual(product.image_url, "")
        self.assertIsNone(product.free_shipping)

    def test_discount_rate_zero_when_absent(self) -> None:
        """discount_rate reads 0.0 when no discount is known."""
        product = Product(item_id="1", product_name="X", price=1.0)
        self.assertEqual(product.discount_rate, 0.0)

    def test_equality(self) -> None:
        """Two products with identical fields are equal."""
        a = Product(item_id="1", product_name="A", price=10.0)
        b = Product(item_id="1", product_name="A", price=10.0)
        self.assertEqual(a, b)


class TestFromRecord(unittest.TestCase):
    """Product.from_record ingress parsing."""

    def test_camel_case_record(self) -> None:
        """A Shopee node parses into typed fields."""
        product = Product.from_record(
            {
                "itemId": 123456,
                "productName": "  Fone Bluetooth TWS  ",
                "price": "89.99",
                "priceDiscountRate": "10",
                "sales": "1,234",
                "ratingStar": "4.8",
                "shopName": "Loja Tech",
                "imageUrl": "https://cf.shopee.com.br/file/abc",
                "offerLink": "https://s.shopee.com.br/x",
            }
        )
        self.assertEqual(product.item_id, "123456")
        self.assertEqual(product.product_name, "Fone Bluetooth TWS")
        self.assertEqual(product.price, 89.99)
        self.assertEqual(product.price_discount_rate, 10.0)
        self.assertEqual(product.sales, 1234)
        self.assertEqual(product.rating_star, 4.8)
        self.assertEqual(product.shop_name, "Loja Tech")
        self.assertIsNone(product.free_shipping)

    def test_snake_case_record(self) -> None:
        """snake_case keys from saved JSON files are accepted too."""
        product = Product.from_record(
            {"item_id": "7", "product_name": "Livro", "price": 20}
        )
        self.assertEqual(product.item_id, "7")
        self.assertEqual(product.price, 20.0)

    def test_malformed_numbers_default(self) -> None:
        """Unparseable numeric fields fall back to defaults."""
        product = Product.from_record(
            {
                "itemId": "1",
                "productName": "X",
                "price": "abc",
                "priceDiscountRate": "n/a",
                "sales": "lots",
                "ratingStar": "",
            }
        )
        self.assertEqual(product.price, 0.0)
        self.assertIsNone(product.price_discount_rate)
        self.assertEqual(product.sales, 0)
        self.assertIsNone(product.rating_star)

    def test_comma_decimal_price_is_rejected(self) -> None:
        """A comma is not treated as a decimal point."""
        product = Product.from_record(
            {"itemId": "1", "productName": "X", "price": "89,99"}
        )
        self.assertEqual(product.price, 0.0)

    def test_out_of_range_values_dropped(self) -> None:
        """Negative discounts and ratings outside (0, 5] are ignored."""
        product = Product.from_record(
            {
                "itemId": "1",
                "productName": "X",
                "price": "10",
                "priceDiscountRate": "-5",
                "ratingStar": "7",
            }
        )
        self.assertIsNone(product.price_discount_rate)
        self.assertIsNone(product.rating_star)

    def test_zero_rating_dropped(self) -> None:
        """A zero rating means unrated."""
        product = Product.from_record(
            {"itemId": "1", "productName": "X", "price": "10", "ratingStar": 0}
        )
        self.assertIsNone(product.rating_star)

    def test_free_shipping_flag(self) -> None:
        """String and boolean shipping flags are both understood."""
        yes = Product.from_record({"freeShipping": "true", "price": 1})
        no = Product.from_record({"free_shipping": False, "price": 1})
        self.assertIs(yes.free_shipping, True)
        self.assertIs(no.free_shipping, False)

    def test_to_record_round_trip(self) -> None:
        """to_record output parses back into an equal product."""
        original = Product(
            item_id="9",
            product_name="Vestido",
            price=59.9,
            price_discount_rate=25.0,
            sales=40,
            rating_star=4.5,
            free_shipping=True,
        )
        self.assertEqual(Product.from_record(original.to_record()), original)


if __name__ == "__main__":
    unittest.main()
