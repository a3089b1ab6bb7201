"""Tests for schedule validation."""
import pytest

from nightduty.models.rules import RuleSet
from nightduty.models.schedule import NightSchedule
from nightduty.models.staff import Staff
from nightduty.solver.engine import generate_night_schedule
from nightduty.solver.validation import ValidationResult, validate_night_schedule

DATES = ["2025-03-01", "2025-03-02", "2025-03-03", "2025-03-04"]


@pytest.fixture
def pair():
    return [Staff(staff_id="a", gender="M"), Staff(staff_id="b", gender="F")]


class TestValidateNightSchedule:
    """Tests for validate_night_schedule."""

    def test_engine_output_is_clean(self, pair, march_10, plain_rules):
        result = generate_night_schedule(pair, march_10, rules=plain_rules)
        v = validate_night_schedule(result, pair, rules=plain_rules)

        assert isinstance(v, ValidationResult)
        assert not v.has_critical_issues
        assert v.as_dict() == {"double_cover": 0, "excluded_dates": 0, "broken_blocks": 0, "shortfall_days": 0}

    def test_double_cover_detected(self, pair, plain_rules):
        result = NightSchedule(
            schedule={"a": {"2025-03-01": "NIGHT"}, "b": {"2025-03-01": "NIGHT"}},
            dates=DATES,
        )
        v = validate_night_schedule(result, pair, rules=plain_rules)
        assert v.double_cover == 1
        assert v.has_critical_issues
        assert v.get_critical_violations()[0].type == "double_cover"

    def test_excluded_date_detected(self, pair, plain_rules):
        result = NightSchedule(schedule={"a": {"2025-03-02": "NIGHT"}}, dates=DATES)
        v = validate_night_schedule(result, pair, rest_days={"2025-03-02": True}, rules=plain_rules)
        assert v.excluded_dates == 1
        assert v.violations[0].staff_id == "a"

    def test_broken_block_is_warning(self, pair, plain_rules):
        result = NightSchedule(
            schedule={"a": {"2025-03-01": "NIGHT", "2025-03-03": "NIGHT"}},
            dates=DATES,
        )
        v = validate_night_schedule(result, pair, rules=plain_rules)
        assert v.broken_blocks == 1
        assert not v.has_critical_issues
        assert v.get_warnings()[0].type == "broken_block"

    def test_distributed_gaps_are_fine(self, pair):
        rules = RuleSet(arrangement_mode="distributed")
        result = NightSchedule(
            schedule={"a": {"2025-03-01": "NIGHT", "2025-03-04": "NIGHT"}},
            dates=DATES,
        )
        assert validate_night_schedule(result, pair, rules=rules).broken_blocks == 0

    def test_shortfall(self, pair, plain_rules):
        result = NightSchedule(
            schedule={"a": {"2025-03-01": "NIGHT"}},
            targets={"a": 3},
            dates=DATES,
        )
        v = validate_night_schedule(result, pair, rules=plain_rules)
        assert v.shortfall_days == 2

    def test_empty_schedule(self, pair):
        v = validate_night_schedule(NightSchedule(), pair)
        assert v.as_dict()["double_cover"] == 0
        assert v.violations == []
