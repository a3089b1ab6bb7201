"""Fixed-holiday lookups consulted by the exclusion resolver."""
from typing import Iterable, Protocol


class HolidayCalendar(Protocol):
    """Anything that can tell whether a date is a fixed holiday."""

    def is_fixed_holiday(self, date_str: str) -> bool:
        ...


class NoHolidays:
    """Calendar without fixed holidays."""

    def is_fixed_holiday(self, date_str: str) -> bool:
        return False


class FixedHolidays:
    """
    Holidays given as full ISO dates ("2025-10-01") or recurring
    month-day pairs ("10-01").
    """

    def __init__(self, dates: Iterable[str] = ()):
        self.exact = set()
        self.recurring = set()
        for d in dates:
            d = str(d).strip()
            if len(d) == 5:
                self.recurring.add(d)
            elif d:
                self.exact.add(d[:10])

    def is_fixed_holiday(self, date_str: str) -> bool:
        return date_str in self.exact or date_str[5:10] in self.recurring

    def __repr__(self):
        return f"FixedHolidays(exact={len(self.exact)}, recurring={len(self.recurring)})"
