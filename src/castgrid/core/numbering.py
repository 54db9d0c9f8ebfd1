"""Date keys and sequential puzzle numbers (core domain).

Dates are calendar-local and carry no time of day. A date key is the
zero-padded ``YYYY-MM-DD`` form that also seeds the daily grid.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Union

LOGGER = logging.getLogger(__name__)

# Puzzle #1.
LAUNCH_DATE = date(2026, 1, 29)

DATE_KEY_FORMAT = "%Y-%m-%d"

DateLike = Union[str, date, None]


def today_date_key() -> str:
    return date.today().strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string, returning None when it is malformed."""

    try:
        return datetime.strptime(value.strip(), DATE_KEY_FORMAT).date()
    except (AttributeError, ValueError):
        return None


def resolve_date(value: DateLike = None) -> date:
    """Return the calendar date for ``value``, degrading to today.

    A ``datetime`` is truncated to its date. Missing or malformed strings
    fall back to today so numbering and seeding never fail.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None:
        return date.today()
    parsed = parse_date_key(value)
    if parsed is None:
        LOGGER.warning("Malformed date key %r, using today", value)
        return date.today()
    return parsed


def resolve_date_key(value: DateLike = None) -> str:
    """Return the canonical date key for ``value``."""

    return resolve_date(value).strftime(DATE_KEY_FORMAT)


def puzzle_number(value: DateLike = None) -> int:
    """Return the 1-based puzzle index; dates before launch clamp to 1."""

    days_since_launch = (resolve_date(value) - LAUNCH_DATE).days
    return max(1, days_since_launch + 1)
