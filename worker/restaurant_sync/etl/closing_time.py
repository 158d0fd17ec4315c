"""Derive the next closing instant from Places `opening_hours` data.

Places reports opening periods in the venue's local time together with a
fixed `utc_offset` (minutes east of UTC). Instead of resolving a real timezone
we shift "now" onto a synthetic local timeline, project each close event onto
the current week there, and shift the result back to UTC.
"""

import logging
import math
from datetime import datetime, timedelta, timezone
from numbers import Real
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def format_iso_utc(value: datetime) -> str:
    """Render an instant as `YYYY-MM-DDTHH:MM:SS.mmmZ`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _to_number(text: str) -> float:
    # Whitespace-only slices read as 0, so " 30" is 00:30.
    return float(text) if text.strip() else 0.0


def _close_minutes(close: Any) -> Optional[float]:
    """Return minutes after local midnight for a close event's "HHMM" time."""
    time_str = close.get("time")
    if not isinstance(time_str, str) or len(time_str) < 3:
        return None
    try:
        hours = _to_number(time_str[0:2])
        minutes = _to_number(time_str[2:4])
    except ValueError:
        return None
    if not (math.isfinite(hours) and math.isfinite(minutes)):
        return None
    return hours * 60 + minutes


def compute_next_close(
    opening_hours: Optional[Mapping[str, Any]],
    utc_offset_minutes: Any,
    now: datetime,
) -> Optional[str]:
    """Return the earliest close instant strictly after `now`, as ISO UTC, or None.

    Periods without a close event (open 24h) and malformed periods are skipped.
    A close that lands exactly on `now` is not in the future; like one that has
    already passed today, it counts from the same weekday next week.
    """
    if not isinstance(opening_hours, Mapping):
        return None
    periods = opening_hours.get("periods")
    if not isinstance(periods, list):
        return None
    if not _is_finite_number(utc_offset_minutes):
        return None

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now_utc = now.astimezone(timezone.utc)

    try:
        offset = timedelta(minutes=utc_offset_minutes)
        now_local = now_utc + offset
    except OverflowError:
        logger.debug("utc_offset %s out of range", utc_offset_minutes)
        return None

    # datetime.weekday() is Monday=0; Places uses Sunday=0.
    local_weekday = (now_local.weekday() + 1) % 7
    local_midnight = now_local.replace(hour=0, minute=0, second=0, microsecond=0)

    best: Optional[datetime] = None
    for period in periods:
        if not isinstance(period, dict):
            continue
        close = period.get("close")
        if not isinstance(close, dict) or not close.get("time"):
            continue
        close_day = close.get("day")
        if not isinstance(close_day, int) or isinstance(close_day, bool) or not 0 <= close_day <= 6:
            continue
        minutes = _close_minutes(close)
        if minutes is None:
            continue

        delta_days = (close_day - local_weekday + 7) % 7
        try:
            candidate = local_midnight + timedelta(days=delta_days, minutes=minutes) - offset
            if candidate <= now_utc:
                # Already closed today (or closing right now): next week's occurrence.
                candidate += timedelta(days=7)
        except OverflowError:
            logger.debug("close event %s falls outside the datetime range", close)
            continue

        if best is None or candidate < best:
            best = candidate

    return format_iso_utc(best) if best is not None else None
