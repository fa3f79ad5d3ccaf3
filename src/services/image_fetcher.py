# src/services/image_fetcher.py

"""Download and decode product photos for the renderer."""

import io

from PIL import Image, UnidentifiedImageError

from src.errors import ImageUnavailableError
from src.scrapers.base_client import BaseClient


class ImageFetcher(BaseClient):
    """Fetch product images; every failure surfaces as ImageUnavailableError."""

    def __init__(self) -> None:
        super().__init__("images")
        self._request_timeout = self.settings.IMAGE_TIMEOUT

    def fetch(self, url: str) -> Image.Image:
        """Return the decoded image at ``url``.

        Raises:
            ImageUnavailableError: empty URL, network failure, non-200
                status or undecodable bytes.
        """
        if not url or not url.startswith(("http://", "https://")):
            raise ImageUnavailableError(url, "missing or non-HTTP URL")

        resp = self._fetch_get(url)
        if resp is None:
            raise ImageUnavailableError(url, "request failed")
        if resp.status_code != 200:
            raise ImageUnavailableError(url, f"HTTP {resp.status_code}")

        try:
            image = Image.open(io.BytesIO(resp.content))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ImageUnavailableError(url, f"undecodable image: {exc}") from exc

        self.logger.debug(
            "Fetched image %s (%dx%d)", url[:80], image.width, image.height
        )
        return image.convert("RGB")
