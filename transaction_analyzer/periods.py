"""Utilities for parsing dates and amounts and matching calendar components."""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

# Commas are only accepted as thousands separators.
_GROUPED_AMOUNT = re.compile(r"[+-]?\d{1,3}(,\d{3})+(\.\d*)?")
_PLAIN_AMOUNT = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")

_FALLBACK_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d %b %Y",
    "%b %d, %Y",
)


def _naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: Any) -> datetime:
    """Return ``value`` as a naive ``datetime``.

    Dates become midnight of that day and timezone-aware values are converted
    to UTC. Raises ``ValueError`` when the value cannot be interpreted.
    """

    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if not text:
        raise ValueError("Empty date value")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        pass
    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {value!r}")


def parse_amount(value: Any) -> float:
    """Return ``value`` as a finite ``float``; raise ``ValueError`` otherwise."""

    if isinstance(value, bool):
        raise ValueError(f"Unsupported amount value: {value!r}")
    if isinstance(value, (int, float)):
        number: Any = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty amount value")
        if _GROUPED_AMOUNT.fullmatch(text):
            text = text.replace(",", "")
        elif not _PLAIN_AMOUNT.fullmatch(text):
            raise ValueError(f"Unrecognised amount: {value!r}")
        number = text
    else:
        raise ValueError(f"Unsupported amount value: {value!r}")
    try:
        amount = float(number)
    except OverflowError as exc:
        raise ValueError(f"Amount is too large: {value!r}") from exc
    if not math.isfinite(amount):
        raise ValueError(f"Amount is not a finite number: {value!r}")
    return amount


def matches_calendar(
    when: Optional[datetime],
    year: Optional[int] = None,
    month: Optional[int] = None,
    day: Optional[int] = None,
) -> bool:
    """Return ``True`` when ``when`` matches every component that is given.

    ``month`` is 1-indexed. A missing ``when`` only matches when no component
    is given.
    """

    if year is None and month is None and day is None:
        return True
    if when is None:
        return False
    return (
        (year is None or when.year == year)
        and (month is None or when.month == month)
        and (day is None or when.day == day)
    )
