"""
Validation
==========
Post-hoc checks over a finished night schedule: single cover, exclusion
respect, block contiguity and quota shortfall.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from nightduty.models.rules import ArrangementMode, RuleSet
from nightduty.models.schedule import NightSchedule
from nightduty.models.staff import Staff
from nightduty.solver.calendar import build_day_list, index_days
from nightduty.solver.exclusions import resolve_exclusions
from nightduty.solver.holidays import HolidayCalendar
from nightduty.utils.logging_setup import get_logger, log_constraint

logger = get_logger("nightduty.solver.validation")


@dataclass
class Violation:
    """Single violation with details."""
    type: str      # "double_cover", "excluded_date", "broken_block", "shortfall"
    severity: str  # "critical", "warning"
    date: str
    message: str
    staff_id: str = ""


@dataclass
class ValidationResult:
    """Validation counters for a night schedule."""
    double_cover: int = 0
    excluded_dates: int = 0
    broken_blocks: int = 0
    shortfall_days: int = 0

    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)

    def as_dict(self) -> Dict[str, int]:
        return {
            "double_cover": self.double_cover,
            "excluded_dates": self.excluded_dates,
            "broken_blocks": self.broken_blocks,
            "shortfall_days": self.shortfall_days,
        }

    @property
    def has_critical_issues(self) -> bool:
        """Double cover or an excluded date is a hard failure."""
        return self.double_cover > 0 or self.excluded_dates > 0

    def get_critical_violations(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "critical"]

    def get_warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.severity == "warning"]


def validate_night_schedule(
    result: NightSchedule,
    staff: List[Staff],
    personal_requests: Optional[Mapping[str, Mapping[str, str]]] = None,
    rest_days: Optional[Mapping[str, bool]] = None,
    rules: Optional[RuleSet] = None,
    holidays: Optional[HolidayCalendar] = None,
) -> ValidationResult:
    """
    Validate a night schedule.

    Args:
        result: Engine output
        staff: Roster used for the run
        personal_requests: {staff_id: {date_str: "REQ"}}
        rest_days: {date_str: bool}
        rules: Rule set used for the run
        holidays: Fixed-holiday lookup

    Returns:
        ValidationResult with all counters
    """
    rules = rules or RuleSet()
    personal_requests = personal_requests or {}
    rest_days = rest_days or {}
    by_id = {s.staff_id: s for s in staff}
    days = build_day_list(result.dates[0], result.dates[-1]) if result.dates else []
    offsets = index_days(days)

    out = ValidationResult()

    # 1. Single cover
    for date_str in result.dates:
        on_duty = result.staff_on(date_str)
        if len(on_duty) > 1:
            out.double_cover += 1
            out.add_violation(Violation(
                type="double_cover", severity="critical", date=date_str,
                message=f"{len(on_duty)} staff on night duty: {', '.join(on_duty)}",
            ))
    log_constraint(logger, "single_cover", out.double_cover == 0, f"{out.double_cover} dates")

    for staff_id in result.schedule:
        s = by_id.get(staff_id)
        if s is None:
            continue
        nights = result.night_dates(staff_id)

        # 2. Exclusions
        excluded = resolve_exclusions(
            s, days, personal_requests.get(staff_id), rest_days, rules, holidays
        )
        for date_str in nights:
            if date_str in excluded:
                out.excluded_dates += 1
                out.add_violation(Violation(
                    type="excluded_date", severity="critical", date=date_str,
                    staff_id=staff_id, message=f"{s.display_name} assigned on an excluded date",
                ))

        # 3. Continuous blocks
        if rules.arrangement_mode == ArrangementMode.CONTINUOUS and nights:
            positions = [offsets[d] for d in nights if d in offsets]
            contiguous = positions == list(range(positions[0], positions[0] + len(positions)))
            if not contiguous:
                out.broken_blocks += 1
                out.add_violation(Violation(
                    type="broken_block", severity="warning", date=nights[0],
                    staff_id=staff_id, message=f"{s.display_name} nights are not one block",
                ))

        # 4. Shortfall
        target = result.targets.get(staff_id, 0)
        if len(nights) < target:
            missing = target - len(nights)
            out.shortfall_days += missing
            out.add_violation(Violation(
                type="shortfall", severity="warning", date=nights[-1] if nights else "",
                staff_id=staff_id, message=f"{s.display_name} is {missing} night(s) short",
            ))

    log_constraint(logger, "exclusions", out.excluded_dates == 0, f"{out.excluded_dates} dates")
    log_constraint(logger, "continuous_blocks", out.broken_blocks == 0, f"{out.broken_blocks} staff")
    log_constraint(logger, "quota", out.shortfall_days == 0, f"{out.shortfall_days} days short")
    return out
