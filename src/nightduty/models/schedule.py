"""Night schedule result models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

from .shift import DutyMarker

# {staff_id: {date_str: "NIGHT"}}
AssignmentTable = Dict[str, Dict[str, str]]


@dataclass
class ScheduleStats:
    """Tallies over a finished assignment table."""
    total_night_shifts: int = 0
    staff_night_shift_counts: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalNightShifts": self.total_night_shifts,
            "staffNightShiftCounts": dict(self.staff_night_shift_counts),
            "errors": list(self.errors),
        }


@dataclass
class NightSchedule:
    """Complete result of one night duty run."""

    schedule: AssignmentTable = field(default_factory=dict)
    stats: ScheduleStats = field(default_factory=ScheduleStats)

    # Run context
    quotas: Dict[str, int] = field(default_factory=dict)   # Quota calculator output
    targets: Dict[str, int] = field(default_factory=dict)  # Count the active strategy aimed for
    dates: List[str] = field(default_factory=list)
    mode: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Output contract consumed by the host application."""
        return {
            "schedule": {sid: dict(cells) for sid, cells in self.schedule.items()},
            "stats": self.stats.to_dict(),
        }

    def night_dates(self, staff_id: str) -> List[str]:
        """Sorted dates on which a staff member has night duty."""
        cells = self.schedule.get(staff_id, {})
        return sorted(d for d, v in cells.items() if v == DutyMarker.NIGHT.value)

    def staff_on(self, date_str: str) -> List[str]:
        """Staff ids on night duty for a date."""
        return [
            sid for sid, cells in self.schedule.items()
            if cells.get(date_str) == DutyMarker.NIGHT.value
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """Convert assignments to a long DataFrame."""
        rows = [
            {"staff_id": sid, "date": d, "duty": v}
            for sid, cells in self.schedule.items()
            for d, v in cells.items()
        ]
        if not rows:
            return pd.DataFrame(columns=["staff_id", "date", "duty"])
        return pd.DataFrame(rows).sort_values(["date", "staff_id"]).reset_index(drop=True)

    def to_matrix(self) -> pd.DataFrame:
        """Convert to a staff × date matrix; empty cells are blank."""
        mat = pd.DataFrame("", index=list(self.schedule.keys()), columns=self.dates, dtype=object)
        for sid, cells in self.schedule.items():
            for d, v in cells.items():
                if d in mat.columns:
                    mat.at[sid, d] = v
        return mat

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "mode": self.mode,
            "days": len(self.dates),
            "staff": len(self.schedule),
            "total_night_shifts": self.stats.total_night_shifts,
            "errors": len(self.stats.errors),
        }
