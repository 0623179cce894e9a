# src/config/logging_config.py

"""Per-run logging for mercadolibre_source.

Every run writes a full DEBUG trace to ``logs/run_YYYYMMDD_HHMMSS.log``.
The console shows the plugin's progress notices ("Importing from Mercado
Libre...", the slow-import and image-cap notices) at INFO and up, tagged
with the plugin name the way a site builder's reporter would show them.
``MERCADOLIBRE_LOG_LEVEL`` or the CLI's ``-v``/``-q`` flags move that
console threshold.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "ml_source"
PLUGIN_TAG = "mercadolibre_source"

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Console labels; anything else falls back to the lowercased level name
_CONSOLE_LABELS = {
    logging.DEBUG: "debug",
    logging.INFO: "notice",
    logging.WARNING: "warn",
}


class PluginConsoleFormatter(logging.Formatter):
    """Formats console records as ``[mercadolibre_source] <label> <message>``."""

    def __init__(self) -> None:
        super().__init__(f"[{PLUGIN_TAG}] %(label)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.label = _CONSOLE_LABELS.get(
            record.levelno, record.levelname.lower()
        )
        return super().format(record)


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = Settings.CONSOLE_LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _console_handler(root_logger: logging.Logger) -> logging.Handler | None:
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            return handler
    return None


def setup_logging(console_level: int | str | None = None) -> Path:
    """Initialise the root ``ml_source`` logger for the current run.

    Args:
        console_level: Threshold for the stderr handler, as a level
            number or name. Defaults to ``Settings.CONSOLE_LOG_LEVEL``.

    Returns:
        The :class:`~pathlib.Path` to the log file of this run. A repeated
        call keeps the existing handlers, applies the new console level
        and returns the log file already in use.
    """
    level = _resolve_level(console_level)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    existing = [
        h for h in root_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    if existing:
        console = _console_handler(root_logger)
        if console is not None:
            console.setLevel(level)
        return Path(existing[0].baseFilename)

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(PluginConsoleFormatter())

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.debug("Logging initialised, log file: %s", log_file)

    return log_file
