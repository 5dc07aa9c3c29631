"""Display date helpers.

Notes carry their date as a ``DD/MM/YYYY`` string in UTC. The same format is
what a date picker parses back into an instant.
"""

from __future__ import annotations

import datetime as dt

DISPLAY_DATE_FORMAT = "%d/%m/%Y"


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def format_display_date(value: dt.datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(dt.UTC)
    return value.strftime(DISPLAY_DATE_FORMAT)


def today_display() -> str:
    return format_display_date(utc_now())


def parse_display_date(value: str) -> dt.datetime:
    """Parse a display date into UTC midnight of that day."""
    try:
        parsed = dt.datetime.strptime(value.strip(), DISPLAY_DATE_FORMAT)
    except ValueError as exc:
        raise ValueError(f"Invalid display date: {value}") from exc
    return parsed.replace(tzinfo=dt.UTC)
