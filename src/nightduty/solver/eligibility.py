"""Eligibility filter: who may receive night duty at all this period."""
from typing import List

from nightduty.models.rules import RuleSet
from nightduty.models.staff import Staff
from nightduty.utils.logging_setup import get_logger

logger = get_logger("nightduty.solver.eligibility")


def is_restricted(staff: Staff) -> bool:
    """Pregnant or lactating staff are never on night duty."""
    return staff.pregnant or staff.lactating


def filter_available_staff(staff: List[Staff], rules: RuleSet) -> List[Staff]:
    """Drop pregnant/lactating staff when the restriction is enabled."""
    if not rules.reproductive_restriction:
        return staff

    available = [s for s in staff if not is_restricted(s)]
    excluded = len(staff) - len(available)
    if excluded:
        logger.info(f"Excluded {excluded} pregnant/lactating staff from night duty")
    return available
