"""
Calendar Builder
================
Expands a start/end date range into the ordered day list every other
component indexes into.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Union

from nightduty.models.shift import WEEKEND_DAYS
from nightduty.utils.logging_setup import get_logger, log_function_call

logger = get_logger("nightduty.solver.calendar")

DateLike = Union[str, date, None]


@dataclass(frozen=True)
class Day:
    """One calendar day of the scheduling period."""
    date: date
    date_str: str   # ISO key used by every map
    day: int        # Day of month
    weekday: int    # 0 = Sunday ... 6 = Saturday
    is_weekend: bool

    @classmethod
    def from_date(cls, d: date) -> "Day":
        weekday = d.isoweekday() % 7
        return cls(
            date=d,
            date_str=format_date(d),
            day=d.day,
            weekday=weekday,
            is_weekend=weekday in WEEKEND_DAYS,
        )


def format_date(d: date) -> str:
    """ISO YYYY-MM-DD key for a date."""
    return d.isoformat()


def parse_date(value: DateLike) -> Optional[date]:
    """Parse an ISO date string; None for missing or malformed values."""
    if value is None:
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.warning(f"Unparseable date {value!r}")
        return None


@log_function_call
def build_day_list(start: DateLike, end: DateLike) -> List[Day]:
    """
    Generate the chronological day list for [start, end] inclusive.

    Missing or malformed bounds, or start after end, yield an empty list.
    """
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        logger.warning(f"Incomplete period: start={start!r}, end={end!r}")
        return []

    days = []
    current = start_date
    while current <= end_date:
        days.append(Day.from_date(current))
        current += timedelta(days=1)

    logger.debug(f"Built {len(days)} days from {start_date} to {end_date}")
    return days


def index_days(days: List[Day]) -> dict:
    """Map each date string to its offset in the day list."""
    return {d.date_str: i for i, d in enumerate(days)}
