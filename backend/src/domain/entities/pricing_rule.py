"""
Pricing Rule Domain Entity
Data-driven discount / price increase applied when posting a job
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from ..enums import AdjustmentKind, AdjustmentMode, ConditionOperator, RuleCategory


@dataclass(frozen=True)
class RuleCondition:
    """Single predicate on a job draft / employer field"""

    field: str
    operator: ConditionOperator
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "operator": self.operator.value, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleCondition":
        return cls(
            field=data["field"],
            operator=ConditionOperator(data["operator"]),
            value=data.get("value"),
        )


@dataclass(frozen=True)
class RuleEffect:
    """What a matching rule does to the running price"""

    kind: AdjustmentKind
    mode: AdjustmentMode
    value: float

    def __post_init__(self):
        if self.value < 0:
            raise ValueError("Rule effect value cannot be negative")
        if self.mode == AdjustmentMode.PERCENTAGE and self.value > 100 and self.kind == AdjustmentKind.DISCOUNT:
            raise ValueError("Percentage discount cannot exceed 100")

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "mode": self.mode.value, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleEffect":
        return cls(
            kind=AdjustmentKind(data["kind"]),
            mode=AdjustmentMode(data["mode"]),
            value=float(data["value"]),
        )


@dataclass(frozen=True)
class PricingRule:
    """Pricing rule domain entity - immutable"""

    id: UUID
    name: str
    category: RuleCategory
    effect: RuleEffect
    conditions: Tuple[RuleCondition, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    priority: int = 50  # 1-100, higher applies first
    is_active: bool = True
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None  # None means no expiry

    # Usage
    times_applied: int = 0
    last_applied_at: Optional[datetime] = None

    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Rule name cannot be empty")
        if not 1 <= self.priority <= 100:
            raise ValueError("Rule priority must be between 1 and 100")

    def is_currently_valid(self, now: Optional[datetime] = None) -> bool:
        """Active and inside its validity window"""
        now = now or datetime.utcnow()
        if not self.is_active:
            return False
        if self.valid_from is not None and now < self.valid_from:
            return False
        if self.valid_to is not None and now > self.valid_to:
            return False
        return True

    def __str__(self) -> str:
        return f"PricingRule({self.name}, priority={self.priority})"
