"""Client utilities for the Google Places Details (Legacy) API."""

import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"

PLACE_DETAILS_FIELDS = ",".join(
    [
        "name",
        "formatted_address",
        "geometry/location",
        "opening_hours",
        "utc_offset",
        "website",
        "formatted_phone_number",
        "url",
        "business_status",
    ]
)
REQUEST_FAILED = "REQUEST_FAILED"


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""

    def __init__(self, status: str, message: Optional[str] = None) -> None:
        super().__init__(message or status)
        self.status = status
        self.message = message


def place_details(place_id: str, api_key: str, timeout: float = 10) -> Dict[str, Any]:
    params = {"place_id": place_id, "fields": PLACE_DETAILS_FIELDS, "key": api_key}
    try:
        response = _SESSION.get(f"{_BASE_URL}/details/json", params=params, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("place_details request failed for %s: %s", place_id, exc)
        raise GooglePlacesError(REQUEST_FAILED, str(exc)) from exc

    if not isinstance(payload, dict):
        logger.error("place_details returned a non-object body for %s", place_id)
        raise GooglePlacesError(REQUEST_FAILED, "unexpected response body")

    status = payload.get("status")
    if status != "OK":
        logger.error("place_details failed: status=%s, error_message=%s", status, payload.get("error_message"))
        raise GooglePlacesError(status or "UNKNOWN", payload.get("error_message") or None)
    result = payload.get("result")
    return result if isinstance(result, dict) else {}
