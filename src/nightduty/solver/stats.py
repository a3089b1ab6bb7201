"""
Result Aggregator
=================
Single source of truth for night counts, used by the engine, the CLI and
the Excel export.
"""
from typing import Dict, List, Mapping

from nightduty.models.schedule import AssignmentTable, ScheduleStats
from nightduty.models.shift import DutyMarker
from nightduty.models.staff import Staff
from nightduty.utils.logging_setup import get_logger

logger = get_logger("nightduty.solver.stats")


def calculate_stats(schedule: AssignmentTable) -> ScheduleStats:
    """Count NIGHT markers per staff id and in total."""
    stats = ScheduleStats()
    for staff_id, cells in schedule.items():
        nights = sum(1 for v in cells.values() if v == DutyMarker.NIGHT.value)
        stats.staff_night_shift_counts[staff_id] = nights
        stats.total_night_shifts += nights

    logger.debug(f"Tallied {stats.total_night_shifts} nights over {len(schedule)} staff")
    return stats


def stats_to_dict_list(
    stats: ScheduleStats,
    staff: List[Staff],
    quotas: Mapping[str, int],
) -> List[Dict]:
    """Per-staff rows for a DataFrame or export."""
    rows = []
    for s in staff:
        if s.staff_id not in stats.staff_night_shift_counts:
            continue
        assigned = stats.staff_night_shift_counts[s.staff_id]
        quota = quotas.get(s.staff_id, 0)
        rows.append({
            "工号": s.staff_id,
            "姓名": s.name,
            "性别": s.gender.value if s.gender else "",
            "应排": quota,
            "实排": assigned,
            "差额": assigned - quota,
        })
    return rows
