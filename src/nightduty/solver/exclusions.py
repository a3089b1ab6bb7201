"""Exclusion resolver: dates a staff member must never be on night duty."""
import math
from typing import List, Mapping, Optional, Set

from nightduty.models.rules import RuleSet
from nightduty.models.shift import DutyMarker
from nightduty.models.staff import CycleHalf, Staff
from nightduty.solver.calendar import Day
from nightduty.solver.holidays import HolidayCalendar, NoHolidays


def menstrual_window(staff: Staff, days: List[Day], rules: RuleSet) -> Set[str]:
    """
    Half of the period blocked by the menstrual restriction.

    The split is positional: FIRST covers the first ceil(n/2) days of the
    list, SECOND the remainder.
    """
    if not rules.menstrual_restriction or staff.cycle_half is None:
        return set()

    mid = math.ceil(len(days) / 2)
    half = days[:mid] if staff.cycle_half is CycleHalf.FIRST else days[mid:]
    return {d.date_str for d in half}


def is_closed_day(date_str: str, rest_days: Mapping[str, bool], holidays: HolidayCalendar) -> bool:
    """Rest days and fixed holidays are closed to everyone."""
    return rest_days.get(date_str) is True or holidays.is_fixed_holiday(date_str)


def resolve_exclusions(
    staff: Staff,
    days: List[Day],
    staff_requests: Optional[Mapping[str, str]],
    rest_days: Mapping[str, bool],
    rules: RuleSet,
    holidays: Optional[HolidayCalendar] = None,
) -> Set[str]:
    """
    Union of rest days, fixed holidays, leave requests and the menstrual
    window, restricted to dates of the period.
    """
    holidays = holidays or NoHolidays()
    staff_requests = staff_requests or {}

    excluded = menstrual_window(staff, days, rules)
    for d in days:
        if is_closed_day(d.date_str, rest_days, holidays):
            excluded.add(d.date_str)
        elif staff_requests.get(d.date_str) == DutyMarker.REQUEST.value:
            excluded.add(d.date_str)
    return excluded
