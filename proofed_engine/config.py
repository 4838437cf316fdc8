"""Configuration and logging setup for Proofed Engine."""

import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

APP_NAME = "proofed-engine"

# Product lookup (Open Food Facts compatible API)
DEFAULT_PRODUCT_API_URL = "https://world.openfoodfacts.org/api/v2"
DEFAULT_HTTP_TIMEOUT = 10.0

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_product_api_url() -> str:
    """Base URL of the product lookup API."""
    url = os.getenv("PROOFED_PRODUCT_API_URL") or DEFAULT_PRODUCT_API_URL
    return url.rstrip("/")


def get_http_timeout() -> float:
    """HTTP timeout in seconds for product lookups."""
    value = os.getenv("PROOFED_HTTP_TIMEOUT")
    if not value:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_HTTP_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_HTTP_TIMEOUT


def get_log_level() -> int:
    """Log level from PROOFED_LOG_LEVEL (a level name such as DEBUG)."""
    name = (os.getenv("PROOFED_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int | None = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=get_log_level() if level is None else level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
        force=True,
    )
    # Keep HTTP client chatter out of debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
