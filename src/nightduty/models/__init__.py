# nightduty/models - Data models for the night duty scheduler
from .rules import ArrangementMode, RuleSet
from .schedule import AssignmentTable, NightSchedule, ScheduleStats
from .shift import DutyMarker
from .staff import CycleHalf, Gender, Staff

__all__ = [
    "Staff", "Gender", "CycleHalf",
    "RuleSet", "ArrangementMode",
    "NightSchedule", "ScheduleStats", "AssignmentTable",
    "DutyMarker",
]
