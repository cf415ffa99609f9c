"""
Business Campaign Domain Entity
Time-boxed promotional discount on job postings
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ..enums import CampaignDiscountType, CampaignStatus, CampaignType, TargetAudience


@dataclass(frozen=True)
class BusinessCampaign:
    """Campaign domain entity - immutable"""

    id: UUID
    name: str
    campaign_type: CampaignType
    start_date: datetime
    end_date: datetime

    description: Optional[str] = None
    status: CampaignStatus = CampaignStatus.DRAFT
    is_active: bool = False

    # Parameters
    discount: float = 0.0
    discount_type: CampaignDiscountType = CampaignDiscountType.PERCENTAGE
    target_audience: TargetAudience = TargetAudience.ALL
    industry_filter: List[str] = field(default_factory=list)
    location_filter: List[str] = field(default_factory=list)
    max_uses: int = 1000
    current_uses: int = 0
    min_job_price: float = 0.0

    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Campaign name cannot be empty")
        if self.end_date <= self.start_date:
            raise ValueError("Campaign end date must be after start date")
        if self.discount < 0:
            raise ValueError("Campaign discount cannot be negative")
        if self.discount_type == CampaignDiscountType.PERCENTAGE and self.discount > 90:
            raise ValueError("Percentage discount cannot exceed 90")

    def has_capacity(self) -> bool:
        return self.current_uses < self.max_uses

    def is_running(self, now: Optional[datetime] = None) -> bool:
        """Active, scheduled for now and not used up"""
        now = now or datetime.utcnow()
        return (
            self.is_active
            and self.status == CampaignStatus.ACTIVE
            and self.start_date <= now <= self.end_date
            and self.has_capacity()
        )

    def __str__(self) -> str:
        return f"Campaign({self.name}, {self.discount} {self.discount_type.value})"
