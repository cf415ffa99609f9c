"""
Business Control Schemas
Admin management of pricing rules, campaigns and the free posting whitelist
"""
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from application.services.pricing import CONDITION_FIELDS
from domain.entities import BusinessCampaign, PricingRule, User
from domain.enums import (
    AdjustmentKind,
    AdjustmentMode,
    CampaignDiscountType,
    CampaignType,
    ConditionOperator,
    RuleCategory,
    TargetAudience,
)


def _naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC"""
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


_LIST_OPERATORS = (ConditionOperator.IN_ARRAY, ConditionOperator.NOT_IN_ARRAY)


class RuleConditionInput(BaseModel):
    """Single rule condition"""

    field: str
    operator: ConditionOperator
    value: Any = None

    @field_validator('field')
    @classmethod
    def validate_field(cls, v: str) -> str:
        if v not in CONDITION_FIELDS:
            raise ValueError(f"field must be one of: {', '.join(CONDITION_FIELDS)}")
        return v

    @model_validator(mode='after')
    def validate_value(self) -> "RuleConditionInput":
        if self.operator in _LIST_OPERATORS and not isinstance(self.value, list):
            raise ValueError(f"{self.operator.value} requires a list value")
        return self


class RuleEffectInput(BaseModel):
    """What the rule does to the price"""

    kind: AdjustmentKind
    mode: AdjustmentMode
    value: float = Field(..., ge=0)

    @model_validator(mode='after')
    def validate_percentage(self) -> "RuleEffectInput":
        if self.mode == AdjustmentMode.PERCENTAGE and self.kind == AdjustmentKind.DISCOUNT and self.value > 100:
            raise ValueError("percentage discount cannot exceed 100")
        return self


class PricingRuleCreateRequest(BaseModel):
    """Create a pricing rule"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: RuleCategory
    conditions: List[RuleConditionInput] = Field(default_factory=list)
    effect: RuleEffectInput
    priority: int = Field(50, ge=1, le=100)
    is_active: bool = True
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None

    @field_validator('valid_from', 'valid_to')
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(v)

    @model_validator(mode='after')
    def validate_window(self) -> "PricingRuleCreateRequest":
        if self.valid_from and self.valid_to and self.valid_to <= self.valid_from:
            raise ValueError("valid_to must be after valid_from")
        return self


class PricingRuleResponse(BaseModel):
    """Pricing rule as returned by the API"""

    id: str
    name: str
    description: Optional[str] = None
    category: str
    conditions: List[dict]
    effect: dict
    priority: int
    is_active: bool
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    times_applied: int = 0
    last_applied_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, rule: PricingRule) -> "PricingRuleResponse":
        return cls(
            id=str(rule.id),
            name=rule.name,
            description=rule.description,
            category=rule.category.value,
            conditions=[c.to_dict() for c in rule.conditions],
            effect=rule.effect.to_dict(),
            priority=rule.priority,
            is_active=rule.is_active,
            valid_from=rule.valid_from,
            valid_to=rule.valid_to,
            times_applied=rule.times_applied,
            last_applied_at=rule.last_applied_at,
            created_at=rule.created_at,
        )


class CampaignCreateRequest(BaseModel):
    """Create a business campaign"""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    campaign_type: CampaignType
    discount: float = Field(..., ge=0)
    discount_type: CampaignDiscountType = CampaignDiscountType.PERCENTAGE
    target_audience: TargetAudience = TargetAudience.ALL
    industry_filter: List[str] = Field(default_factory=list)
    location_filter: List[str] = Field(default_factory=list)
    max_uses: int = Field(1000, ge=1)
    min_job_price: float = Field(0.0, ge=0)
    start_date: datetime
    end_date: datetime
    activate: bool = False

    @field_validator('start_date', 'end_date')
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return _naive_utc(v)

    @model_validator(mode='after')
    def validate_campaign(self) -> "CampaignCreateRequest":
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        if self.discount_type == CampaignDiscountType.PERCENTAGE and self.discount > 90:
            raise ValueError("percentage discount cannot exceed 90")
        if self.target_audience == TargetAudience.SPECIFIC_INDUSTRY and not self.industry_filter:
            raise ValueError("industry_filter is required for specific_industry campaigns")
        return self


class CampaignResponse(BaseModel):
    """Campaign as returned by the API"""

    id: str
    name: str
    description: Optional[str] = None
    campaign_type: str
    status: str
    is_active: bool
    discount: float
    discount_type: str
    target_audience: str
    industry_filter: List[str]
    location_filter: List[str]
    max_uses: int
    current_uses: int
    min_job_price: float
    start_date: datetime
    end_date: datetime

    @classmethod
    def from_entity(cls, campaign: BusinessCampaign) -> "CampaignResponse":
        return cls(
            id=str(campaign.id),
            name=campaign.name,
            description=campaign.description,
            campaign_type=campaign.campaign_type.value,
            status=campaign.status.value,
            is_active=campaign.is_active,
            discount=campaign.discount,
            discount_type=campaign.discount_type.value,
            target_audience=campaign.target_audience.value,
            industry_filter=list(campaign.industry_filter),
            location_filter=list(campaign.location_filter),
            max_uses=campaign.max_uses,
            current_uses=campaign.current_uses,
            min_job_price=campaign.min_job_price,
            start_date=campaign.start_date,
            end_date=campaign.end_date,
        )


class WhitelistGrantRequest(BaseModel):
    """Grant free posting to an employer"""

    reason: str = Field(..., min_length=1, max_length=200)

    @field_validator('reason')
    @classmethod
    def strip_reason(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("reason cannot be blank")
        return v


class WhitelistEntryResponse(BaseModel):
    """Employer on the free posting whitelist"""

    employer_id: str
    email: str
    company_name: Optional[str] = None
    free_posting_enabled: bool
    reason: Optional[str] = None
    granted_by: Optional[str] = None
    granted_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "WhitelistEntryResponse":
        return cls(
            employer_id=str(user.id),
            email=user.email,
            company_name=user.company_name,
            free_posting_enabled=user.free_posting_enabled,
            reason=user.free_posting_reason,
            granted_by=str(user.free_posting_granted_by) if user.free_posting_granted_by else None,
            granted_at=user.free_posting_granted_at,
        )
