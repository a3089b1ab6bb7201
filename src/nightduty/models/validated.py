"""
Pydantic Validated Models
=========================
Validation layer for rule sets arriving from storage or user input.

Usage:
    from nightduty.models.validated import ValidatedRuleSet

    rules = ValidatedRuleSet(male_days=4, arrangement_mode="distributed").to_dataclass()

Note: the engine itself consumes the RuleSet dataclass.
"""
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from nightduty.models.rules import ArrangementMode, RuleSet


class ArrangementModeEnum(str, Enum):
    """Placement policies."""
    CONTINUOUS = "continuous"
    DISTRIBUTED = "distributed"


class ValidatedRuleSet(BaseModel):
    """
    Pydantic-validated night duty rule set.

    Use this for strict validation at API boundaries.
    Can be converted to/from the dataclass RuleSet.
    """
    # Quotas
    male_days: int = Field(default=4, ge=1, le=31, description="Base night days for group A")
    female_days: int = Field(default=3, ge=1, le=31, description="Base night days for group B")
    continuous_enabled: bool = Field(default=True)

    # Placement
    arrangement_mode: ArrangementModeEnum = Field(default=ArrangementModeEnum.CONTINUOUS)
    min_interval_days: int = Field(default=7, ge=1, le=31)

    # Restrictions
    menstrual_restriction: bool = Field(default=True)
    reproductive_restriction: bool = Field(default=True)

    # Reductions
    reduction_enabled: bool = Field(default=True)
    reduction_ratio: float = Field(default=0.2, ge=0.0, le=1.0)
    compensation_enabled: bool = Field(default=True)
    compensation_threshold: int = Field(default=4, ge=0)

    average_distribution: bool = Field(default=True)
    group_by_gender: bool = Field(default=True)

    @field_validator("reduction_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        """Round away float noise from form inputs."""
        return round(v, 4)

    def to_dataclass(self) -> RuleSet:
        """Convert to the RuleSet dataclass consumed by the engine."""
        data = self.model_dump()
        data["arrangement_mode"] = ArrangementMode(
            getattr(self.arrangement_mode, "value", self.arrangement_mode)
        )
        return RuleSet.from_dict(data)

    @classmethod
    def from_dataclass(cls, rules: RuleSet) -> "ValidatedRuleSet":
        """Create from a RuleSet dataclass."""
        return cls(**rules.to_dict())

    class Config:
        """Pydantic model config."""
        use_enum_values = True
        validate_assignment = True
