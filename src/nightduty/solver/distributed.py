"""
Distributed Placement Strategy
==============================
Spreads single nights over the period, keeping at least min_interval_days
between two nights of the same person when the calendar allows it.
"""
from typing import List, Mapping, Set, Tuple

from nightduty.models.staff import Staff
from nightduty.solver.base import PlacementContext, PlacementStrategy
from nightduty.solver.calendar import Day
from nightduty.utils.logging_setup import get_logger

logger = get_logger("nightduty.solver.distributed")


def candidate_dates(days: List[Day], blocked: Set[str]) -> List[Tuple[int, str]]:
    """(offset, date_str) for every unblocked day, chronological."""
    return [(i, d.date_str) for i, d in enumerate(days) if d.date_str not in blocked]


def pick_spaced(
    candidates: List[Tuple[int, str]],
    required_days: int,
    min_interval: int,
) -> Tuple[List[str], bool]:
    """
    Greedy spaced selection, relaxed if it falls short.

    Returns:
        (accepted dates, True if the interval had to be relaxed)
    """
    accepted = []
    last = -min_interval - 1
    for offset, date_str in candidates:
        if len(accepted) >= required_days:
            break
        if offset - last >= min_interval:
            accepted.append(date_str)
            last = offset

    relaxed = False
    if len(accepted) < required_days:
        chosen = set(accepted)
        for _, date_str in candidates:
            if len(accepted) >= required_days:
                break
            if date_str not in chosen:
                accepted.append(date_str)
                chosen.add(date_str)
                relaxed = True
    return accepted, relaxed


def assign_distributed_for_staff(
    ctx: PlacementContext,
    staff: Staff,
    required_days: int,
    min_interval: int,
) -> List[str]:
    """
    Place up to required_days single nights for one staff member.

    Shortfalls are recorded in ctx.errors, never raised.
    """
    candidates = candidate_dates(ctx.days, ctx.blocked_for(staff))
    ctx.slog.detail("candidates", len(candidates))

    accepted, relaxed = pick_spaced(candidates, required_days, min_interval)
    if relaxed:
        ctx.record(
            f"{staff.display_name}: minimum interval of {min_interval} days relaxed"
        )
    if len(accepted) < required_days:
        ctx.record(
            f"{staff.display_name}: only {len(accepted)} of {required_days} night days could be assigned"
        )

    logger.debug(f"{staff.staff_id}: {accepted}")
    ctx.assign(staff, accepted)
    return accepted


class DistributedStrategy(PlacementStrategy):
    """Per-person quotas, spaced single nights."""

    name = "distributed"

    def place_staff(self, staff: Staff, is_group_a: bool, quotas: Mapping[str, int]) -> None:
        required = quotas.get(staff.staff_id, 0)
        assign_distributed_for_staff(self.ctx, staff, required, self.ctx.rules.min_interval_days)
