# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_api_host_is_https(self) -> None:
        self.assertTrue(Settings.API_HOST.startswith("https://"))
        self.assertFalse(Settings.API_HOST.endswith("/"))

    def test_page_size_matches_server(self) -> None:
        """The search endpoint pages by 50."""
        self.assertEqual(Settings.PAGE_SIZE, 50)

    def test_import_policy_thresholds(self) -> None:
        self.assertEqual(Settings.SLOW_IMPORT_THRESHOLD, 50)
        self.assertEqual(Settings.IMAGE_LIMIT_THRESHOLD, 300)
        self.assertEqual(Settings.MAX_IMAGES_LARGE_BATCH, 3)

    def test_request_timeout_is_positive_int(self) -> None:
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_max_retries_is_positive(self) -> None:
        self.assertGreaterEqual(Settings.MAX_RETRIES, 1)

    def test_pool_size_positive(self) -> None:
        self.assertGreaterEqual(Settings.MAX_CONCURRENT_PRODUCTS, 1)

    def test_not_found_is_not_retried(self) -> None:
        self.assertNotIn(404, Settings.RETRY_STATUS_CODES)

    def test_node_types_distinct(self) -> None:
        types = {
            Settings.PRODUCT_NODE_TYPE,
            Settings.FILTERS_NODE_TYPE,
            Settings.FILE_NODE_TYPE,
        }
        self.assertEqual(len(types), 3)

    def test_path_constants_are_paths(self) -> None:
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.CACHE_DIR, Path)
        self.assertIsInstance(Settings.RESULTS_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_console_log_level_is_known(self) -> None:
        """The default console level names a stdlib logging level."""
        self.assertIn(
            Settings.CONSOLE_LOG_LEVEL,
            ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        )

    def test_default_headers_accept_json(self) -> None:
        self.assertEqual(
            Settings.DEFAULT_HEADERS["Accept"], "application/json"
        )


if __name__ == "__main__":
    unittest.main()
