# tests/test_image_fetcher.py

"""Tests for product image download and decoding."""

import io
import unittest
from unittest.mock import MagicMock, patch

from PIL import Image

from src.errors import ImageUnavailableError
from src.services.image_fetcher import ImageFetcher


def _png_bytes(mode: str = "RGBA") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (4, 3), (255, 0, 0, 255) if mode == "RGBA" else 0).save(
        buffer, format="PNG"
    )
    return buffer.getvalue()


def _resp(status: int, content: bytes = b"") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.content = content
    return resp


@patch("src.scrapers.base_client.curl_requests.Session")
class TestImageFetcher(unittest.TestCase):
    """ImageFetcher.fetch outcomes."""

    def test_decodes_image_as_rgb(self, mock_session_cls: MagicMock) -> None:
        """A valid PNG is decoded and converted to RGB."""
        fetcher = ImageFetcher()
        fetcher.session.request.return_value = _resp(200, _png_bytes())
        image = fetcher.fetch("https://cf.shopee.com.br/file/abc")
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(image.size, (4, 3))

    def test_empty_url(self, mock_session_cls: MagicMock) -> None:
        """An empty URL fails without a request."""
        fetcher = ImageFetcher()
        with self.assertRaises(ImageUnavailableError):
            fetcher.fetch("")
        fetcher.session.request.assert_not_called()

    def test_non_http_url(self, mock_session_cls: MagicMock) -> None:
        """Only http(s) URLs are fetched."""
        with self.assertRaises(ImageUnavailableError):
            ImageFetcher().fetch("file:///etc/passwd")

    def test_http_error(self, mock_session_cls: MagicMock) -> None:
        """A 404 becomes ImageUnavailableError."""
        fetcher = ImageFetcher()
        fetcher.session.request.return_value = _resp(404)
        with self.assertRaises(ImageUnavailableError) as ctx:
            fetcher.fetch("https://cf.shopee.com.br/file/missing")
        self.assertIn("HTTP 404", str(ctx.exception))

    def test_network_failure(self, mock_session_cls: MagicMock) -> None:
        """Exhausted retries become ImageUnavailableError."""
        fetcher = ImageFetcher()
        fetcher.session.request.side_effect = TimeoutError("slow")
        with self.assertRaises(ImageUnavailableError):
            fetcher.fetch("https://cf.shopee.com.br/file/abc")

    def test_undecodable_bytes(self, mock_session_cls: MagicMock) -> None:
        """Non-image bytes become ImageUnavailableError."""
        fetcher = ImageFetcher()
        fetcher.session.request.return_value = _resp(200, b"<html>nope</html>")
        with self.assertRaises(ImageUnavailableError):
            fetcher.fetch("https://cf.shopee.com.br/file/abc")

    def test_uses_image_timeout(self, mock_session_cls: MagicMock) -> None:
        """Image downloads use the shorter image timeout."""
        fetcher = ImageFetcher()
        fetcher.session.request.return_value = _resp(200, _png_bytes())
        fetcher.fetch("https://cf.shopee.com.br/file/abc")
        self.assertEqual(
            fetcher.session.request.call_args.kwargs["timeout"],
            fetcher.settings.IMAGE_TIMEOUT,
        )


if __name__ == "__main__":
    unittest.main()
