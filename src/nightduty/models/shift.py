"""Duty markers and day constants."""
from enum import Enum


class DutyMarker(str, Enum):
    """Cell values used in the assignment table and request maps."""
    NIGHT = "NIGHT"   # 大夜
    REQUEST = "REQ"   # Personal leave request

    @property
    def is_work(self) -> bool:
        """True if this marker is a worked duty."""
        return self is DutyMarker.NIGHT


# Weekday numbering used by Day.weekday (0 = Sunday ... 6 = Saturday)
SUNDAY = 0
SATURDAY = 6
WEEKEND_DAYS = (SUNDAY, SATURDAY)

WEEKDAY_LABELS = ["日", "一", "二", "三", "四", "五", "六"]


def weekday_label(weekday: int) -> str:
    """Chinese short label for a weekday number (0 = Sunday)."""
    return WEEKDAY_LABELS[weekday % 7]
