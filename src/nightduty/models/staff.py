"""Staff model and ingestion normalization."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Gender(str, Enum):
    """Quota cohorts. A is the male group, B the female group."""
    A = "A"
    B = "B"

    @classmethod
    def parse(cls, value: Any) -> Optional["Gender"]:
        """Parse gender from the spellings the roster may contain."""
        if isinstance(value, Gender):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        if key in _GENDER_A:
            return cls.A
        if key in _GENDER_B:
            return cls.B
        return None


_GENDER_A = {"男", "m", "male", "a"}
_GENDER_B = {"女", "f", "female", "b"}


class CycleHalf(str, Enum):
    """Half of the scheduling period covered by the menstrual restriction."""
    FIRST = "upper"
    SECOND = "lower"

    @classmethod
    def parse(cls, value: Any) -> Optional["CycleHalf"]:
        """Any non-empty value other than a first-half spelling means SECOND."""
        if isinstance(value, CycleHalf):
            return value
        if value is None:
            return None
        key = str(value).strip().lower()
        if not key:
            return None
        if key in _FIRST_HALF:
            return cls.FIRST
        return cls.SECOND


_FIRST_HALF = {"upper", "上", "上半月", "first"}


def _first_present(d: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = d.get(key)
        if value is not None and value != "":
            return value
    return None


def _flag(d: Dict[str, Any], *keys: str) -> bool:
    """A flag is set only when one of its spellings holds the boolean True."""
    return any(d.get(key) is True for key in keys)


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


@dataclass(frozen=True)
class Staff:
    """A staff member as seen by the night duty engine. Never mutated."""

    staff_id: str
    name: str = ""
    gender: Optional[Gender] = None
    pregnant: bool = False
    lactating: bool = False
    cycle_half: Optional[CycleHalf] = None
    prior_night_days: int = 0

    def __post_init__(self):
        object.__setattr__(self, "staff_id", str(self.staff_id).strip())
        object.__setattr__(self, "name", str(self.name or "").strip())
        if not isinstance(self.gender, Gender):
            object.__setattr__(self, "gender", Gender.parse(self.gender))
        if self.cycle_half is not None and not isinstance(self.cycle_half, CycleHalf):
            object.__setattr__(self, "cycle_half", CycleHalf.parse(self.cycle_half))
        if self.prior_night_days < 0:
            object.__setattr__(self, "prior_night_days", 0)

    @property
    def display_name(self) -> str:
        return self.name or self.staff_id

    @property
    def is_group_a(self) -> bool:
        return self.gender is Gender.A

    def to_dict(self) -> dict:
        """Convert to the canonical dictionary schema."""
        return {
            "staff_id": self.staff_id,
            "name": self.name,
            "gender": self.gender.value if self.gender else "",
            "pregnant": self.pregnant,
            "lactating": self.lactating,
            "cycle_half": self.cycle_half.value if self.cycle_half else "",
            "prior_night_days": self.prior_night_days,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Staff":
        """
        Create from a roster record.

        Accepts the canonical schema produced by to_dict() as well as the
        host application's field spellings (staffId/id, isPregnant/pregnant,
        isLactating/lactating, menstrualPeriod/menstrualPeriodType,
        lastMonthNightShiftDays).
        """
        staff_id = _first_present(d, "staff_id", "staffId", "id")
        if staff_id is None:
            raise ValueError(f"Staff record has no identifier: {d!r}")
        return cls(
            staff_id=str(staff_id),
            name=str(d.get("name") or ""),
            gender=Gender.parse(d.get("gender")),
            pregnant=_flag(d, "pregnant", "isPregnant"),
            lactating=_flag(d, "lactating", "isLactating"),
            cycle_half=CycleHalf.parse(
                _first_present(d, "cycle_half", "menstrualPeriod", "menstrualPeriodType")
            ),
            prior_night_days=_safe_int(
                _first_present(d, "prior_night_days", "lastMonthNightShiftDays"), 0
            ),
        )
