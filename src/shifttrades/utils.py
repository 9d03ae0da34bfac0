"""Utility functions: name canonicalization, time/duration parsing, date normalization"""
from typing import Any, Optional
import logging
import math
import numbers
import re
from datetime import datetime, date, time, timedelta, timezone
from dateutil import parser as dateparser
import pandas as pd

from .errors import InvalidTime

logger = logging.getLogger(__name__)

MAX_SHIFT_HOURS = 24.0
SECONDS_PER_DAY = 24 * 60 * 60

# spreadsheet serial dates count days from 1899-12-30 (absorbs the 1900 leap-year bug)
EXCEL_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)

_US_DATETIME_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}\s+(.+)$")
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[ T](.+)$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?$")
_DECIMAL_RE = re.compile(r"^\d*\.?\d+$")
_HOURS_NUMBER_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def is_blank(value: Any) -> bool:
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def normalize_name(name: Any) -> str:
    if is_blank(name):
        return ""
    return str(name).strip().upper()


def parse_time_fraction(value: Any) -> float:
    """Read a time-of-day cell as a fraction of a day in [0, 1).

    Accepts spreadsheet time numbers (0.5 == noon, any date part is dropped),
    datetime/time objects, and text such as '9:00 AM', '17:30:15',
    '1/2/2024 9:00 PM', '2024-01-02 21:00' or '0.375'.
    Raises InvalidTime for anything else.
    """
    if is_blank(value) or isinstance(value, bool):
        raise InvalidTime(value)

    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        seconds = value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1e6
        return seconds / SECONDS_PER_DAY

    if _is_number(value):
        if not math.isfinite(value):
            raise InvalidTime(value)
        return float(value) % 1

    if not isinstance(value, str):
        raise InvalidTime(value)

    text = value.strip()
    m = _US_DATETIME_RE.match(text) or _ISO_DATETIME_RE.match(text)
    if m:
        text = m.group(1).strip()

    m = _TIME_RE.match(text)
    if m:
        hour = int(m.group(1))
        minute = int(m.group(2))
        second = int(m.group(3)) if m.group(3) else 0
        meridiem = m.group(4).upper() if m.group(4) else None
        if meridiem == "AM" and hour == 12:
            hour = 0
        elif meridiem == "PM" and hour != 12:
            hour += 12
        if hour > 23 or minute > 59 or second > 59:
            raise InvalidTime(value)
        return (hour * 3600 + minute * 60 + second) / SECONDS_PER_DAY

    if _DECIMAL_RE.match(text):
        fraction = float(text)
        if 0 <= fraction <= 1:
            # 1.0 is midnight at the end of the day
            return fraction % 1

    raise InvalidTime(value)


def elapsed_hours(start: float, end: float) -> float:
    """Hours from start to end (fractions of a day), wrapping past midnight, capped at 24."""
    diff = (end - start) * 24
    if diff < 0:
        diff += 24
    return min(diff, MAX_SHIFT_HOURS)


def shift_hours(start_value: Any, end_value: Any) -> float:
    """Duration of a shift given raw start/end cells; 0 when either is unreadable."""
    try:
        start = parse_time_fraction(start_value)
        end = parse_time_fraction(end_value)
    except InvalidTime as e:
        logger.debug("treating shift as zero hours: %s", e)
        return 0.0
    return elapsed_hours(start, end)


def parse_hours_value(value: Any) -> Optional[float]:
    """Parse a direct Hours cell like '8', '7.5 hrs' or '8h'. None when no number is present."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if _is_number(value):
        return float(value)
    cleaned = re.sub(r"[^\d.\-]", "", str(value))
    m = _HOURS_NUMBER_RE.match(cleaned)
    if not m:
        return None
    return float(m.group(0))


def normalize_date(value: Any) -> str:
    """Return 'YYYY-MM-DD' for a date cell, or the input text unchanged when it is not a date.

    Numbers are spreadsheet serial dates; text goes through dateutil (month-first).
    """
    if is_blank(value):
        return ""
    if isinstance(value, bool):
        return str(value)

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if _is_number(value):
        try:
            return (EXCEL_EPOCH + timedelta(days=float(value))).date().isoformat()
        except (OverflowError, ValueError):
            return str(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = dateparser.parse(text, dayfirst=False, yearfirst=False)
        except (ValueError, OverflowError):
            return text
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
        return parsed.date().isoformat()

    return str(value)


def format_us_date(iso_date: str) -> str:
    """'2024-01-02' -> '1/2/2024'; anything that is not an ISO date is returned as-is."""
    try:
        d = date.fromisoformat(iso_date)
    except (TypeError, ValueError):
        return iso_date
    return f"{d.month}/{d.day}/{d.year}"
