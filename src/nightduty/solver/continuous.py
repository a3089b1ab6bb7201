"""
Continuous Placement Strategy
=============================
One unbroken block of nights per person, first fit from the start of the
period. Staff without any valid block fall back to distributed placement.

Block length is the rule set's raw group quota, not the adjusted per-person
quota from the quota calculator.
"""
from typing import List, Mapping, Optional, Set

from nightduty.models.staff import Staff
from nightduty.solver.base import PlacementStrategy
from nightduty.solver.calendar import Day
from nightduty.solver.distributed import assign_distributed_for_staff
from nightduty.utils.logging_setup import get_logger

logger = get_logger("nightduty.solver.continuous")

# Fallback spacing ignores rules.min_interval_days
FALLBACK_INTERVAL_DAYS = 7


def find_continuous_window(
    days: List[Day],
    length: int,
    blocked: Set[str],
) -> Optional[List[str]]:
    """Lowest-offset run of `length` consecutive unblocked days, or None."""
    if length < 1:
        return None
    for start in range(len(days) - length + 1):
        window = days[start:start + length]
        if all(d.date_str not in blocked for d in window):
            return [d.date_str for d in window]
    return None


class ContinuousStrategy(PlacementStrategy):
    """Raw group quota as a contiguous block, distributed fallback."""

    name = "continuous"

    def place_staff(self, staff: Staff, is_group_a: bool, quotas: Mapping[str, int]) -> None:
        ctx = self.ctx
        length = ctx.rules.group_days(is_group_a)

        window = find_continuous_window(ctx.days, length, ctx.blocked_for(staff))
        if window:
            logger.debug(f"{staff.staff_id}: block {window[0]}..{window[-1]}")
            ctx.assign(staff, window)
            return

        ctx.record(
            f"{staff.display_name}: no {length}-day continuous block available, using distributed placement"
        )
        assign_distributed_for_staff(ctx, staff, length, FALLBACK_INTERVAL_DAYS)
