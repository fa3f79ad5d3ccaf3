# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings
from src.models.card import Template


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_request_timeout_is_positive_int(self) -> None:
        """REQUEST_TIMEOUT must be a positive integer."""
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_max_retries_is_positive(self) -> None:
        """MAX_RETRIES must be >= 1."""
        self.assertGreaterEqual(Settings.MAX_RETRIES, 1)

    def test_circuit_breaker_threshold_positive(self) -> None:
        """CIRCUIT_BREAKER_THRESHOLD must be >= 1."""
        self.assertGreaterEqual(
            Settings.CIRCUIT_BREAKER_THRESHOLD, 1
        )

    def test_card_dimensions_are_portrait(self) -> None:
        """Cards default to 1080x1920."""
        self.assertEqual(Settings.CARD_WIDTH, 1080)
        self.assertEqual(Settings.CARD_HEIGHT, 1920)

    def test_jpeg_quality_in_range(self) -> None:
        """JPEG_QUALITY is a fraction in (0, 1]."""
        self.assertGreater(Settings.JPEG_QUALITY, 0)
        self.assertLessEqual(Settings.JPEG_QUALITY, 1)

    def test_gemini_models_non_empty(self) -> None:
        """At least one Gemini model is configured for fallback."""
        self.assertGreaterEqual(len(Settings.GEMINI_MODELS), 1)

    def test_default_templates_are_known(self) -> None:
        """Every default template name is a Template value."""
        known = {t.value for t in Template}
        for name in Settings.DEFAULT_TEMPLATES:
            with self.subTest(template=name):
                self.assertIn(name, known)

    def test_sort_by_sales_is_two(self) -> None:
        """productOfferV2 sorts by sales with sortType 2."""
        self.assertEqual(Settings.SHOPEE_SORT_BY_SALES, 2)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.OUTPUT_DIR, Path)
        self.assertIsInstance(Settings.CACHE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_impersonate_browser_is_string(self) -> None:
        """IMPERSONATE_BROWSER must be a non-empty string."""
        self.assertIsInstance(Settings.IMPERSONATE_BROWSER, str)
        self.assertTrue(Settings.IMPERSONATE_BROWSER)


if __name__ == "__main__":
    unittest.main()
