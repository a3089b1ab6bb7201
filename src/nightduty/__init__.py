"""Night duty (大夜) scheduler."""
from nightduty.models import ArrangementMode, NightSchedule, RuleSet, Staff
from nightduty.solver.engine import generate_night_schedule

__version__ = "0.1.0"

__all__ = ["generate_night_schedule", "NightSchedule", "RuleSet", "ArrangementMode", "Staff"]
