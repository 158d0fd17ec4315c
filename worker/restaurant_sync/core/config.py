"""Application configuration helpers.

`GOOGLE_MAPS_API_KEY` is the only mandatory value; it is billable and must come
from the environment (or a local `.env`), never from source.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SHEET_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQ9pFuDf9lpudF0_WfUJ2cJlbowZMmtV9VYxnTDeSq4uFMRUnm3yMZzro982N_C9WrDoXYf9GH_5VM5"
    "/pub?output=csv"
)
DEFAULT_OUTPUT_PATH = "restaurants.json"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str
    sheet_csv_url: str = DEFAULT_SHEET_CSV_URL
    output_path: str = DEFAULT_OUTPUT_PATH
    http_timeout: float = 10.0


def _get_required_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigError(f"Missing {name} env var.")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load, validate and cache settings from environment variables."""
    load_dotenv()

    google_maps_api_key = _get_required_env("GOOGLE_MAPS_API_KEY")
    sheet_csv_url = os.getenv("SHEET_CSV_URL") or DEFAULT_SHEET_CSV_URL
    output_path = os.getenv("RESTAURANTS_OUTPUT_PATH") or DEFAULT_OUTPUT_PATH

    timeout_raw = os.getenv("HTTP_TIMEOUT_SECONDS", "10")
    try:
        http_timeout = float(timeout_raw)
    except ValueError:
        logger.warning("HTTP_TIMEOUT_SECONDS=%r is not numeric; using 10 seconds.", timeout_raw)
        http_timeout = 10.0

    return Settings(
        google_maps_api_key=google_maps_api_key,
        sheet_csv_url=sheet_csv_url,
        output_path=output_path,
        http_timeout=http_timeout,
    )
