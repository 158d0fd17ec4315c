"""Fetch the published Google Sheet as raw CSV text."""

import logging

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class SheetFetchError(RuntimeError):
    """Raised when the published CSV cannot be downloaded."""


def fetch_csv(url: str, timeout: float = 10) -> str:
    try:
        response = _SESSION.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise SheetFetchError(f"Failed to fetch CSV: {exc}") from exc

    if not response.ok:
        raise SheetFetchError(f"Failed to fetch CSV: {response.status_code} {response.reason}")

    # Sheets exports are UTF-8, occasionally with a leading BOM.
    text = response.content.decode("utf-8-sig", errors="replace")
    logger.info("Fetched %d bytes of CSV from %s", len(response.content), url)
    return text
