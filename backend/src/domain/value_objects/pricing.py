"""
Job Pricing Value Objects
Price breakdown computed once when a job is posted
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..enums import AdjustmentKind


@dataclass(frozen=True)
class PriceAdjustment:
    """One discount or increase contributed by a rule or a campaign"""

    source: str  # "rule" or "campaign"
    source_id: str
    name: str
    kind: AdjustmentKind
    amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "source_id": self.source_id,
            "name": self.name,
            "kind": self.kind.value,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriceAdjustment":
        return cls(
            source=data["source"],
            source_id=data["source_id"],
            name=data.get("name", ""),
            kind=AdjustmentKind(data["kind"]),
            amount=float(data["amount"]),
        )


@dataclass(frozen=True)
class JobPricing:
    """Final price breakdown of a job posting"""

    base_price: float
    discount: float = 0.0
    price_increase: float = 0.0
    final_price: float = 0.0
    applied_rules: Tuple[str, ...] = ()
    campaign_applied: Optional[str] = None
    free_posting: bool = False
    currency: str = "EUR"
    adjustments: Tuple[PriceAdjustment, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.base_price < 0:
            raise ValueError("Base price cannot be negative")
        if self.final_price < 0:
            raise ValueError("Final price cannot be negative")

    @property
    def is_free(self) -> bool:
        return self.final_price == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_price": self.base_price,
            "discount": self.discount,
            "price_increase": self.price_increase,
            "final_price": self.final_price,
            "applied_rules": list(self.applied_rules),
            "campaign_applied": self.campaign_applied,
            "free_posting": self.free_posting,
            "currency": self.currency,
            "adjustments": [a.to_dict() for a in self.adjustments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobPricing":
        return cls(
            base_price=float(data["base_price"]),
            discount=float(data.get("discount", 0)),
            price_increase=float(data.get("price_increase", 0)),
            final_price=float(data.get("final_price", 0)),
            applied_rules=tuple(data.get("applied_rules") or ()),
            campaign_applied=data.get("campaign_applied"),
            free_posting=bool(data.get("free_posting", False)),
            currency=data.get("currency", "EUR"),
            adjustments=tuple(
                PriceAdjustment.from_dict(a) for a in data.get("adjustments") or ()
            ),
        )
