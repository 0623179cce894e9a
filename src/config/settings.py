# src/config/settings.py

"""Central configuration for the mercadolibre_source plugin."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the mercadolibre_source plugin."""

    # --- Mercado Libre API ---
    API_HOST: str = "https://api.mercadolibre.com"
    PAGE_SIZE: int = 50                 # Server-side search page size

    # --- Plugin options (overridable from .env) ---
    SITE_ID: str = os.getenv("MERCADOLIBRE_SITE_ID", "")
    USERNAME: str = os.getenv("MERCADOLIBRE_USERNAME", "")

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("MERCADOLIBRE_LOG_LEVEL", "INFO").upper()

    # --- Import policy ---
    SLOW_IMPORT_THRESHOLD: int = 50     # Products before "slow" notice
    IMAGE_LIMIT_THRESHOLD: int = 300    # Products before images are capped
    MAX_IMAGES_LARGE_BATCH: int = 3     # Images per product when capped
    MAX_CONCURRENT_PRODUCTS: int = 25   # Enrichment pool size

    # --- Requests ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Attempts per request
    RETRY_DELAY: float = 1.0            # Base backoff between attempts
    RETRY_STATUS_CODES: tuple[int, ...] = (429, 500, 502, 503, 504)

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "es-AR,es;q=0.9,en;q=0.8",
    }

    # --- Node identity ---
    NODE_NAMESPACE: str = "mercadolibre-source"
    PRODUCT_NODE_TYPE: str = "MercadoLibreProduct"
    FILTERS_NODE_TYPE: str = "MercadoLibreFilters"
    FILE_NODE_TYPE: str = "File"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CACHE_DIR: Path = BASE_DIR / ".cache" / "images"
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
