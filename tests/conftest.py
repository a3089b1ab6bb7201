"""Pytest configuration and fixtures."""
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from nightduty.models.rules import RuleSet
from nightduty.models.staff import Staff


class FixedRandom:
    """Random source that always draws the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(autouse=True)
def reset_nightduty_handlers():
    """Handlers added by setup_logging must not outlive the test's streams."""
    yield
    logger = logging.getLogger("nightduty")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def sample_staff():
    """Small mixed roster."""
    return [
        Staff(staff_id="m1", name="张伟", gender="男"),
        Staff(staff_id="m2", name="王强", gender="男", prior_night_days=4),
        Staff(staff_id="f1", name="李娜", gender="女", cycle_half="upper"),
        Staff(staff_id="f2", name="刘芳", gender="女"),
        Staff(staff_id="f3", name="陈静", gender="女", pregnant=True),
    ]


@pytest.fixture
def march_10():
    """Ten-day period, 2025-03-01 (Saturday) to 2025-03-10."""
    return {"startDate": "2025-03-01", "endDate": "2025-03-10", "year": 2025, "month": 3}


@pytest.fixture
def plain_rules():
    """Rules without randomness or menstrual/compensation adjustments."""
    return RuleSet(
        reduction_enabled=False,
        compensation_enabled=False,
        menstrual_restriction=False,
    )


@pytest.fixture
def no_draw():
    """Random source that never triggers a reduction."""
    return FixedRandom(0.99)
