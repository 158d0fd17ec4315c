"""Utilities for turning sheet rows and Places responses into snapshot records."""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from restaurant_sync.etl.closing_time import compute_next_close
from restaurant_sync.models import REQUIRED_COLUMNS, BaseRecord

logger = logging.getLogger(__name__)


class CsvSchemaError(ValueError):
    """Raised when the sheet is empty or lacks a required column."""


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _lower(value: Any) -> str:
    return _normalize(value).lower()


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _safe_offset(value: Any) -> Optional[float]:
    """utc_offset in minutes; whole numbers stay ints so the JSON reads -300, not -300.0."""
    number = _safe_float(value)
    if number is not None and number.is_integer():
        return int(number)
    return number


def build_header_map(header_row: Sequence[str]) -> Dict[str, int]:
    """Map required column names to their index, case-insensitively."""
    header = [_lower(cell) for cell in header_row]
    columns: Dict[str, int] = {}
    for name in REQUIRED_COLUMNS:
        if name not in header:
            raise CsvSchemaError(f"Missing required column header: {name}")
        columns[name] = header.index(name)
    return columns


def to_base_record(row: Sequence[str], header_map: Dict[str, int]) -> Optional[BaseRecord]:
    """Build a BaseRecord from a raw row; returns None for blank rows."""

    def cell(name: str) -> str:
        idx = header_map[name]
        return row[idx] if idx < len(row) else ""

    record = BaseRecord(
        name=_normalize(cell("name")),
        category=_lower(cell("category")),
        google_maps_url=_normalize(cell("google_maps_url")),
        place_id=_normalize(cell("place_id")),
        notes=_normalize(cell("notes")),
        speed=_lower(cell("speed")),
        price=_normalize(cell("price")),
    )
    if record.is_blank():
        logger.debug("Skipping blank row")
        return None
    return record


def _empty_place_fields(base: BaseRecord) -> Dict[str, Any]:
    return {
        "address": None,
        "lat": None,
        "lng": None,
        "open_now": None,
        "weekday_text": [],
        "website": None,
        "phone": None,
        "url": base.google_maps_url or None,
        "next_close_iso": None,
        "business_status": None,
        "utc_offset": None,
    }


def to_passthrough_record(base: BaseRecord) -> Dict[str, Any]:
    """Record for a row without a place_id: sheet values only."""
    return {**base.to_dict(), **_empty_place_fields(base)}


def to_failed_record(base: BaseRecord, status: str, message: Optional[str]) -> Dict[str, Any]:
    return {
        **to_passthrough_record(base),
        "_error": {"status": status, "message": message},
    }


def to_enriched_record(base: BaseRecord, result: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Merge a Place Details `result` into the sheet record."""
    if not isinstance(result, dict):
        result = {}
    geometry = result.get("geometry") or {}
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(location, dict):
        location = None
    opening = result.get("opening_hours") if isinstance(result.get("opening_hours"), dict) else None
    utc_offset = _safe_offset(result.get("utc_offset"))

    weekday_text: List[str] = []
    if opening is not None and isinstance(opening.get("weekday_text"), list):
        weekday_text = opening["weekday_text"]

    return {
        **base.to_dict(),
        "name": base.name or result.get("name") or "",
        "address": _strip_or_none(result.get("formatted_address")),
        "lat": _safe_float(location.get("lat")) if location else None,
        "lng": _safe_float(location.get("lng")) if location else None,
        "open_now": opening.get("open_now") is True if opening is not None else None,
        "weekday_text": weekday_text,
        "website": _strip_or_none(result.get("website")),
        "phone": _strip_or_none(result.get("formatted_phone_number")),
        "url": result.get("url") or base.google_maps_url or None,
        "next_close_iso": compute_next_close(opening, utc_offset, now),
        "business_status": result.get("business_status") or None,
        "utc_offset": utc_offset,
    }
