"""
Business Control Service Interface
Admin management of pricing rules, campaigns and free posting
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from application.repositories.criteria import Page
from domain.entities import BusinessCampaign, PricingRule, User
from domain.enums import CampaignStatus, RuleCategory
from presentation.api.v1.schemas.business_control import (
    CampaignCreateRequest,
    PricingRuleCreateRequest,
)


class IBusinessControlService(ABC):
    """Business control service interface"""

    @abstractmethod
    async def list_rules(
        self,
        category: Optional[RuleCategory] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[PricingRule], Page]:
        pass

    @abstractmethod
    async def create_rule(self, admin: User, request: PricingRuleCreateRequest) -> PricingRule:
        pass

    @abstractmethod
    async def toggle_rule(self, admin: User, rule_id: UUID) -> PricingRule:
        """Flip the active flag of a rule"""
        pass

    @abstractmethod
    async def list_campaigns(
        self,
        status: Optional[CampaignStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[BusinessCampaign], Page]:
        pass

    @abstractmethod
    async def create_campaign(self, admin: User, request: CampaignCreateRequest) -> BusinessCampaign:
        pass

    @abstractmethod
    async def activate_campaign(self, admin: User, campaign_id: UUID) -> BusinessCampaign:
        pass

    @abstractmethod
    async def pause_campaign(self, admin: User, campaign_id: UUID) -> BusinessCampaign:
        pass

    @abstractmethod
    async def list_whitelist(self) -> List[User]:
        """Employers allowed to post for free"""
        pass

    @abstractmethod
    async def grant_free_posting(self, admin: User, employer_id: UUID, reason: str) -> User:
        """
        Put an employer on the free posting whitelist

        Raises:
            ResourceNotFoundException: unknown user
            ValidationException: not an employer, or already whitelisted
        """
        pass

    @abstractmethod
    async def revoke_free_posting(self, admin: User, employer_id: UUID) -> User:
        pass
