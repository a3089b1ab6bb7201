"""Night duty rule set and its (de)serialization."""
import copy
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional


class ArrangementMode(str, Enum):
    """Placement policy for night duty."""
    CONTINUOUS = "continuous"    # One unbroken block per person
    DISTRIBUTED = "distributed"  # Single days spread with a minimum spacing


@dataclass
class RuleSet:
    """Configuration for one night duty run. Passed explicitly to the engine."""

    # Base quotas per cohort (group A = male, group B = female)
    male_days: int = 4
    female_days: int = 3
    continuous_enabled: bool = True

    arrangement_mode: ArrangementMode = ArrangementMode.CONTINUOUS
    min_interval_days: int = 7  # Distributed mode only

    # Restrictions
    menstrual_restriction: bool = True
    reproductive_restriction: bool = True  # Pregnancy / lactation

    # A random share of staff gets one day less
    reduction_enabled: bool = True
    reduction_ratio: float = 0.2

    # Staff at or above the threshold last period get one day less
    compensation_enabled: bool = True
    compensation_threshold: int = 4

    # Accepted for configuration compatibility, no effect on placement
    average_distribution: bool = True
    group_by_gender: bool = True

    def __post_init__(self):
        if not isinstance(self.arrangement_mode, ArrangementMode):
            self.arrangement_mode = ArrangementMode(self.arrangement_mode)

    def group_days(self, is_group_a: bool) -> int:
        """Raw base quota for a cohort."""
        return self.male_days if is_group_a else self.female_days

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a flat dictionary."""
        d = asdict(self)
        d["arrangement_mode"] = self.arrangement_mode.value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RuleSet":
        """Create from a flat dictionary. Unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in names})

    def to_nested(self) -> Dict[str, Any]:
        """Serialize to the host application's nested layout."""
        return {
            "continuousNightShift": {
                "enabled": self.continuous_enabled,
                "maleDays": self.male_days,
                "femaleDays": self.female_days,
                "arrangementMode": self.arrangement_mode.value,
                "minIntervalDays": self.min_interval_days,
            },
            "menstrualPeriodRestriction": {"enabled": self.menstrual_restriction},
            "lactationPregnancyRestriction": {"enabled": self.reproductive_restriction},
            "reduceNightShiftDays": {
                "enabled": self.reduction_enabled,
                "reductionRatio": self.reduction_ratio,
            },
            "lastMonthCompensation": {
                "enabled": self.compensation_enabled,
                "priorityThreshold": self.compensation_threshold,
            },
            "averageDistribution": {
                "enabled": self.average_distribution,
                "groupByGender": self.group_by_gender,
            },
        }

    @classmethod
    def from_nested(cls, d: Optional[Dict[str, Any]]) -> "RuleSet":
        """
        Create from the host application's nested layout.

        The given sections are deep-merged over the defaults, so a partially
        saved configuration keeps every key it does not mention.
        """
        merged = deep_merge(cls().to_nested(), d or {})
        cns = merged["continuousNightShift"]
        return cls(
            male_days=int(cns["maleDays"]),
            female_days=int(cns["femaleDays"]),
            continuous_enabled=bool(cns["enabled"]),
            arrangement_mode=ArrangementMode(cns["arrangementMode"]),
            min_interval_days=int(cns.get("minIntervalDays") or 7),
            menstrual_restriction=bool(merged["menstrualPeriodRestriction"]["enabled"]),
            reproductive_restriction=bool(merged["lactationPregnancyRestriction"]["enabled"]),
            reduction_enabled=bool(merged["reduceNightShiftDays"]["enabled"]),
            reduction_ratio=float(merged["reduceNightShiftDays"]["reductionRatio"]),
            compensation_enabled=bool(merged["lastMonthCompensation"]["enabled"]),
            compensation_threshold=int(merged["lastMonthCompensation"]["priorityThreshold"]),
            average_distribution=bool(merged["averageDistribution"]["enabled"]),
            group_by_gender=bool(merged["averageDistribution"].get("groupByGender", True)),
        )

    @classmethod
    def coerce(cls, rules: Any) -> "RuleSet":
        """Accept a RuleSet, a flat or nested dict, or None (defaults)."""
        if rules is None:
            return cls()
        if isinstance(rules, RuleSet):
            return rules
        if isinstance(rules, dict):
            if "continuousNightShift" in rules or any(isinstance(v, dict) for v in rules.values()):
                return cls.from_nested(rules)
            return cls.from_dict(rules)
        raise TypeError(f"Unsupported rules type: {type(rules).__name__}")


def _is_mapping(item: Any) -> bool:
    return isinstance(item, dict)


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge source into a copy of target."""
    output = copy.deepcopy(target)
    for key, value in source.items():
        if _is_mapping(value) and _is_mapping(output.get(key)):
            output[key] = deep_merge(output[key], value)
        else:
            output[key] = copy.deepcopy(value)
    return output
