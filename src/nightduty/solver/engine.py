"""Night duty engine: roster, calendar and rules in, duty table out."""
import random
import time
import uuid
from typing import Any, Dict, List, Mapping, Optional, Union

from nightduty.models.rules import ArrangementMode, RuleSet
from nightduty.models.schedule import NightSchedule
from nightduty.models.staff import Staff
from nightduty.solver.base import PlacementContext, PlacementStrategy, split_by_gender
from nightduty.solver.calendar import build_day_list
from nightduty.solver.continuous import ContinuousStrategy
from nightduty.solver.distributed import DistributedStrategy
from nightduty.solver.eligibility import filter_available_staff
from nightduty.solver.holidays import HolidayCalendar, NoHolidays
from nightduty.solver.quota import calculate_night_shift_days
from nightduty.solver.stats import calculate_stats
from nightduty.utils.logging_setup import SolverLogger, get_logger
from nightduty.utils.structured_logging import get_structured_logger, run_context

logger = get_logger("nightduty.solver")

STRATEGIES = {
    ArrangementMode.CONTINUOUS: ContinuousStrategy,
    ArrangementMode.DISTRIBUTED: DistributedStrategy,
}


def normalize_staff(staff: List[Union[Staff, Mapping[str, Any]]]) -> List[Staff]:
    """Accept Staff objects or raw roster dicts."""
    return [s if isinstance(s, Staff) else Staff.from_dict(s) for s in staff]


def period_bounds(schedule_config: Optional[Mapping[str, Any]]):
    """(start, end) from camelCase or snake_case keys; None when absent."""
    cfg = schedule_config or {}
    start = cfg.get("startDate", cfg.get("start_date"))
    end = cfg.get("endDate", cfg.get("end_date"))
    return start, end


def select_strategy(rules: RuleSet, ctx: PlacementContext) -> PlacementStrategy:
    return STRATEGIES[rules.arrangement_mode](ctx)


def generate_night_schedule(
    staff: List[Union[Staff, Mapping[str, Any]]],
    schedule_config: Optional[Mapping[str, Any]],
    personal_requests: Optional[Mapping[str, Mapping[str, str]]] = None,
    rest_days: Optional[Mapping[str, bool]] = None,
    rules: Union[RuleSet, Dict[str, Any], None] = None,
    rng: Optional[random.Random] = None,
    holidays: Optional[HolidayCalendar] = None,
) -> NightSchedule:
    """
    Assign night duty over the configured period.

    Args:
        staff: Roster (Staff objects or raw dicts)
        schedule_config: {startDate, endDate, year, month}
        personal_requests: {staff_id: {date_str: "REQ"}}
        rest_days: {date_str: bool}
        rules: RuleSet, flat or nested dict; defaults when None
        rng: Random source for quota reduction
        holidays: Fixed-holiday lookup

    Returns:
        NightSchedule; degradations are listed in stats.errors
    """
    start_time = time.time()
    rules = RuleSet.coerce(rules)
    personal_requests = personal_requests or {}
    rest_days = rest_days or {}
    holidays = holidays or NoHolidays()

    slog = get_structured_logger("nightduty.solver")
    with run_context(run_id=uuid.uuid4().hex[:8]):
        solver_log = SolverLogger("nightduty.solver")
        solver_log.phase("Night duty")

        roster = normalize_staff(staff)
        days = build_day_list(*period_bounds(schedule_config))
        solver_log.step(f"{len(roster)} staff, {len(days)} days, mode={rules.arrangement_mode.value}")

        available = filter_available_staff(roster, rules)

        ctx = PlacementContext(
            days=days,
            rules=rules,
            personal_requests=personal_requests,
            rest_days=rest_days,
            holidays=holidays,
        )

        group_a, group_b = split_by_gender(available)
        grouped = {s.staff_id for s in group_a + group_b}
        for s in available:
            if s.staff_id not in grouped:
                ctx.record(f"{s.display_name}: unknown gender, not scheduled")

        quotas = calculate_night_shift_days(
            available, days, personal_requests, rest_days, rules, rng=rng, holidays=holidays
        )
        if rules.arrangement_mode == ArrangementMode.CONTINUOUS:
            targets = {s.staff_id: rules.group_days(s.is_group_a) for s in group_a + group_b}
        else:
            targets = {s.staff_id: quotas[s.staff_id] for s in group_a + group_b}

        strategy = select_strategy(rules, ctx)
        strategy.run(available, quotas)

        stats = calculate_stats(ctx.schedule)
        stats.errors = list(ctx.errors)

        elapsed = time.time() - start_time
        logger.info(
            f"Assigned {stats.total_night_shifts} nights to {len(ctx.schedule)} staff "
            f"in {elapsed:.3f}s ({len(stats.errors)} warnings)"
        )
        slog.info(
            "night_schedule_generated",
            mode=rules.arrangement_mode.value,
            staff=len(ctx.schedule),
            days=len(days),
            nights=stats.total_night_shifts,
            errors=len(stats.errors),
        )

        return NightSchedule(
            schedule=ctx.schedule,
            stats=stats,
            quotas=quotas,
            targets=targets,
            dates=[d.date_str for d in days],
            mode=rules.arrangement_mode.value,
        )
