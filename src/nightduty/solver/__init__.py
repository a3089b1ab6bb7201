# nightduty/solver - Greedy night duty placement
from .calendar import Day, build_day_list
from .continuous import ContinuousStrategy, find_continuous_window
from .distributed import DistributedStrategy, assign_distributed_for_staff
from .eligibility import filter_available_staff
from .engine import generate_night_schedule
from .exclusions import menstrual_window, resolve_exclusions
from .holidays import FixedHolidays, HolidayCalendar, NoHolidays
from .quota import calculate_night_shift_days
from .stats import calculate_stats
from .validation import ValidationResult, Violation, validate_night_schedule

__all__ = [
    "generate_night_schedule",
    "build_day_list",
    "Day",
    "filter_available_staff",
    "calculate_night_shift_days",
    "resolve_exclusions",
    "menstrual_window",
    "ContinuousStrategy",
    "DistributedStrategy",
    "find_continuous_window",
    "assign_distributed_for_staff",
    "calculate_stats",
    "validate_night_schedule",
    "ValidationResult",
    "Violation",
    "HolidayCalendar",
    "NoHolidays",
    "FixedHolidays",
]
