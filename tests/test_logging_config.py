# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.logging_config import (
    ROOT_LOGGER_NAME,
    PluginConsoleFormatter,
    setup_logging,
)
from src.config.settings import Settings


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Reset the ml_source logger and point logs at a temp dir."""
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._saved_handlers = list(self.root_logger.handlers)
        self.root_logger.handlers.clear()
        self.addCleanup(self._restore_handlers)

        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        logs_dir = Path(tmp.name) / "logs"
        patcher = patch.object(Settings, "LOGS_DIR", logs_dir)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _restore_handlers(self) -> None:
        for handler in self.root_logger.handlers:
            handler.close()
        self.root_logger.handlers[:] = self._saved_handlers

    def test_setup_creates_log_file(self) -> None:
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_log_file_inside_logs_dir(self) -> None:
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")

    def test_file_handler_level_debug(self) -> None:
        setup_logging()
        file_handlers = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def _console_handler(self) -> logging.Handler:
        [handler] = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        return handler

    def test_console_shows_notices_by_default(self) -> None:
        """Progress notices at INFO reach stderr unless configured away."""
        with patch.object(Settings, "CONSOLE_LOG_LEVEL", "INFO"):
            setup_logging()
        self.assertEqual(self._console_handler().level, logging.INFO)

    def test_console_level_argument(self) -> None:
        setup_logging("warning")
        self.assertEqual(self._console_handler().level, logging.WARNING)

    def test_console_level_from_settings(self) -> None:
        with patch.object(Settings, "CONSOLE_LOG_LEVEL", "ERROR"):
            setup_logging()
        self.assertEqual(self._console_handler().level, logging.ERROR)

    def test_unknown_console_level_rejected(self) -> None:
        with self.assertRaises(ValueError):
            setup_logging("chatty")

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        first = setup_logging()
        count_before = len(self.root_logger.handlers)
        second = setup_logging()
        self.assertEqual(len(self.root_logger.handlers), count_before)
        self.assertEqual(first, second)

    def test_repeated_call_updates_console_level(self) -> None:
        setup_logging("INFO")
        setup_logging(logging.DEBUG)
        self.assertEqual(self._console_handler().level, logging.DEBUG)

    def test_console_formatter_labels(self) -> None:
        """INFO records read as notices, tagged with the plugin name."""
        formatter = PluginConsoleFormatter()

        def render(level: int, message: str) -> str:
            record = logging.LogRecord(
                "ml_source.source", level, __file__, 1, message, None, None
            )
            return formatter.format(record)

        self.assertEqual(
            render(logging.INFO, "Importing from Mercado Libre..."),
            "[mercadolibre_source] notice Importing from Mercado Libre...",
        )
        self.assertEqual(
            render(logging.WARNING, "Limiting to 3 images per product."),
            "[mercadolibre_source] warn Limiting to 3 images per product.",
        )
        self.assertEqual(
            render(logging.ERROR, "boom"),
            "[mercadolibre_source] error boom",
        )

    def test_module_loggers_propagate_to_root(self) -> None:
        """Child loggers such as ml_source.client reach the run log."""
        log_path = setup_logging()
        logging.getLogger("ml_source.client").warning("page 2 failed")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn("page 2 failed", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
