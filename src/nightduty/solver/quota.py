"""
Quota Calculator
================
Required night duty days per staff member for the period.

Algorithm per staff member (roster order):
    1. base = male_days for group A, female_days otherwise
    2. compensation: prior_night_days >= threshold -> one day less
    3. reduction: one random draw per staff, < reduction_ratio -> one day less
    Quotas never drop below 1 through steps 2 and 3.

The random source is injected so that runs can be reproduced.
"""
import random
from typing import Dict, List, Mapping, Optional

from nightduty.models.rules import RuleSet
from nightduty.models.shift import DutyMarker
from nightduty.models.staff import Staff
from nightduty.solver.calendar import Day
from nightduty.solver.holidays import HolidayCalendar, NoHolidays
from nightduty.utils.logging_setup import get_logger, log_function_call

logger = get_logger("nightduty.solver.quota")

MIN_QUOTA = 1


def count_working_days(
    days: List[Day],
    rest_days: Mapping[str, bool],
    holidays: HolidayCalendar,
) -> int:
    """Days that are neither rest days nor fixed holidays."""
    return sum(
        1 for d in days
        if rest_days.get(d.date_str) is not True and not holidays.is_fixed_holiday(d.date_str)
    )


def count_personal_request_days(
    personal_requests: Mapping[str, Mapping[str, str]],
    days: List[Day],
) -> int:
    """Count leave markers that fall inside the period, across all staff."""
    count = 0
    for requests in personal_requests.values():
        for d in days:
            if requests.get(d.date_str) == DutyMarker.REQUEST.value:
                count += 1
    return count


def reduce_by_one(quota: int) -> int:
    return max(MIN_QUOTA, quota - 1)


@log_function_call
def calculate_night_shift_days(
    staff: List[Staff],
    days: List[Day],
    personal_requests: Mapping[str, Mapping[str, str]],
    rest_days: Mapping[str, bool],
    rules: RuleSet,
    rng: Optional[random.Random] = None,
    holidays: Optional[HolidayCalendar] = None,
) -> Dict[str, int]:
    """
    Compute each staff member's required night day count.

    Args:
        staff: Eligible staff
        days: Day list (bookkeeping only)
        personal_requests: {staff_id: {date_str: "REQ"}}
        rest_days: {date_str: bool}
        rules: Rule set
        rng: Random source with a random() method
        holidays: Fixed-holiday lookup

    Returns:
        {staff_id: quota}
    """
    rng = rng or random.Random()
    holidays = holidays or NoHolidays()

    working_days = count_working_days(days, rest_days, holidays)
    available_days = working_days - count_personal_request_days(personal_requests, days)
    logger.debug(f"Working days: {working_days}, available after leave: {available_days}")

    quotas = {}
    for s in staff:
        quota = rules.group_days(s.is_group_a)

        if rules.compensation_enabled and s.prior_night_days >= rules.compensation_threshold:
            quota = reduce_by_one(quota)
            logger.debug(f"{s.staff_id}: compensation for {s.prior_night_days} prior nights")

        if rules.reduction_enabled and rng.random() < rules.reduction_ratio:
            quota = reduce_by_one(quota)
            logger.debug(f"{s.staff_id}: randomly reduced")

        quotas[s.staff_id] = quota

    if rules.average_distribution:
        logger.debug("Average distribution is enabled but has no effect on quotas")

    logger.info(f"Quotas for {len(quotas)} staff: total {sum(quotas.values())} days")
    return quotas
