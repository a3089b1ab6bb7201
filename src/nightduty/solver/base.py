"""
Placement Strategy Base
=======================
Shared run state and the group-by-group driver used by both placement
strategies. The engine picks exactly one strategy per run.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Set, Tuple

from nightduty.models.rules import RuleSet
from nightduty.models.schedule import AssignmentTable
from nightduty.models.shift import DutyMarker
from nightduty.models.staff import Gender, Staff
from nightduty.solver.calendar import Day, index_days
from nightduty.solver.exclusions import resolve_exclusions
from nightduty.solver.holidays import HolidayCalendar, NoHolidays
from nightduty.utils.logging_setup import SolverLogger


@dataclass
class PlacementContext:
    """
    State for a single run. The assignment table and used dates are created
    per run and must not be reused.
    """
    days: List[Day]
    rules: RuleSet
    personal_requests: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    rest_days: Mapping[str, bool] = field(default_factory=dict)
    holidays: HolidayCalendar = field(default_factory=NoHolidays)

    schedule: AssignmentTable = field(default_factory=dict)
    used_dates: Set[str] = field(default_factory=set)
    errors: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.offsets: Dict[str, int] = index_days(self.days)
        self.slog = SolverLogger("nightduty.solver.placement")

    def exclusions_for(self, staff: Staff) -> Set[str]:
        return resolve_exclusions(
            staff,
            self.days,
            self.personal_requests.get(staff.staff_id),
            self.rest_days,
            self.rules,
            self.holidays,
        )

    def blocked_for(self, staff: Staff) -> Set[str]:
        """Personal exclusions plus dates already taken by anyone."""
        return self.exclusions_for(staff) | self.used_dates

    def ensure_entry(self, staff: Staff) -> Dict[str, str]:
        return self.schedule.setdefault(staff.staff_id, {})

    def assign(self, staff: Staff, dates: List[str]) -> None:
        """Write NIGHT for each date in chronological order and claim it."""
        cells = self.ensure_entry(staff)
        for date_str in sorted(dates, key=self.offsets.__getitem__):
            cells[date_str] = DutyMarker.NIGHT.value
            self.used_dates.add(date_str)

    def record(self, message: str) -> None:
        """Surface a degradation in stats.errors."""
        self.slog.logger.warning(message)
        self.errors.append(message)


def split_by_gender(staff: List[Staff]) -> Tuple[List[Staff], List[Staff]]:
    """Group A and group B, roster order preserved."""
    group_a = [s for s in staff if s.gender is Gender.A]
    group_b = [s for s in staff if s.gender is Gender.B]
    return group_a, group_b


def by_priority(staff: List[Staff]) -> List[Staff]:
    """Fewer prior night days first; ties keep roster order."""
    return sorted(staff, key=lambda s: s.prior_night_days)


class PlacementStrategy(ABC):
    """Places night duty for both cohorts, group A first."""

    name: str = ""

    def __init__(self, ctx: PlacementContext):
        self.ctx = ctx

    def run(self, staff: List[Staff], quotas: Mapping[str, int]) -> AssignmentTable:
        group_a, group_b = split_by_gender(staff)
        for label, group, is_group_a in (("A", group_a, True), ("B", group_b, False)):
            self.ctx.slog.step(f"{self.name}: group {label}, {len(group)} staff")
            for s in by_priority(group):
                self.ctx.ensure_entry(s)
                self.ctx.slog.enter(s.display_name)
                self.place_staff(s, is_group_a, quotas)
                self.ctx.slog.exit(f"{len(self.ctx.schedule[s.staff_id])} nights")
        return self.ctx.schedule

    @abstractmethod
    def place_staff(self, staff: Staff, is_group_a: bool, quotas: Mapping[str, int]) -> None:
        """Place night duty for one staff member."""
        pass
