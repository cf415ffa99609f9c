"""
BusinessControlService Implementation
Admin operations over pricing rules, campaigns and the free posting whitelist
"""
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from application.repositories.criteria import Page
from application.repositories.interfaces import (
    ICampaignRepository,
    IPricingRuleRepository,
    IUserRepository,
)
from application.services.business_control import IBusinessControlService
from core.exceptions import ResourceNotFoundException, ValidationException
from core.logging_config import logger
from domain.entities import BusinessCampaign, PricingRule, RuleCondition, RuleEffect, User
from domain.enums import CampaignStatus, RuleCategory
from presentation.api.v1.schemas.business_control import (
    CampaignCreateRequest,
    PricingRuleCreateRequest,
)


class BusinessControlService(IBusinessControlService):
    """Business control service implementation"""

    def __init__(
        self,
        user_repository: IUserRepository,
        rule_repository: IPricingRuleRepository,
        campaign_repository: ICampaignRepository,
    ):
        self.user_repo = user_repository
        self.rule_repo = rule_repository
        self.campaign_repo = campaign_repository

    # Pricing rules

    async def list_rules(
        self,
        category: Optional[RuleCategory] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[PricingRule], Page]:
        rules, total = await self.rule_repo.list_rules(category, is_active, page, limit)
        return rules, Page.build(page, limit, total)

    async def create_rule(self, admin: User, request: PricingRuleCreateRequest) -> PricingRule:
        now = datetime.utcnow()
        rule = PricingRule(
            id=uuid4(),
            name=request.name.strip(),
            description=request.description,
            category=request.category,
            conditions=tuple(
                RuleCondition(field=c.field, operator=c.operator, value=c.value)
                for c in request.conditions
            ),
            effect=RuleEffect(
                kind=request.effect.kind,
                mode=request.effect.mode,
                value=request.effect.value,
            ),
            priority=request.priority,
            is_active=request.is_active,
            valid_from=request.valid_from or now,
            valid_to=request.valid_to,
            created_by=admin.id,
            created_at=now,
            updated_at=now,
        )
        rule = await self.rule_repo.create(rule)
        logger.info(f"Pricing rule created: {rule.id} '{rule.name}' by admin {admin.id}")
        return rule

    async def toggle_rule(self, admin: User, rule_id: UUID) -> PricingRule:
        rule = await self.rule_repo.get_by_id(rule_id)
        if not rule:
            raise ResourceNotFoundException("Pricing rule", str(rule_id))

        rule = await self.rule_repo.update(replace(rule, is_active=not rule.is_active))
        logger.info(
            f"Pricing rule {rule.id} {'activated' if rule.is_active else 'deactivated'} by admin {admin.id}"
        )
        return rule

    # Campaigns

    async def list_campaigns(
        self,
        status: Optional[CampaignStatus] = None,
        page: int = 1,
        limit: int = 20
    ) -> Tuple[List[BusinessCampaign], Page]:
        campaigns, total = await self.campaign_repo.list_campaigns(status, page, limit)
        return campaigns, Page.build(page, limit, total)

    async def create_campaign(self, admin: User, request: CampaignCreateRequest) -> BusinessCampaign:
        now = datetime.utcnow()
        campaign = BusinessCampaign(
            id=uuid4(),
            name=request.name.strip(),
            description=request.description,
            campaign_type=request.campaign_type,
            start_date=request.start_date,
            end_date=request.end_date,
            status=CampaignStatus.ACTIVE if request.activate else CampaignStatus.DRAFT,
            is_active=request.activate,
            discount=request.discount,
            discount_type=request.discount_type,
            target_audience=request.target_audience,
            industry_filter=list(request.industry_filter),
            location_filter=list(request.location_filter),
            max_uses=request.max_uses,
            min_job_price=request.min_job_price,
            created_by=admin.id,
            created_at=now,
            updated_at=now,
        )
        campaign = await self.campaign_repo.create(campaign)
        logger.info(f"Campaign created: {campaign.id} '{campaign.name}' ({campaign.status.value}) by admin {admin.id}")
        return campaign

    async def activate_campaign(self, admin: User, campaign_id: UUID) -> BusinessCampaign:
        campaign = await self._get_campaign(campaign_id)

        if campaign.status in (CampaignStatus.COMPLETED, CampaignStatus.CANCELLED):
            raise ValidationException("status", f"A {campaign.status.value} campaign cannot be activated")
        if campaign.end_date < datetime.utcnow():
            raise ValidationException("end_date", "Campaign has already ended")

        campaign = await self.campaign_repo.update(
            replace(campaign, status=CampaignStatus.ACTIVE, is_active=True)
        )
        logger.info(f"Campaign {campaign.id} activated by admin {admin.id}")
        return campaign

    async def pause_campaign(self, admin: User, campaign_id: UUID) -> BusinessCampaign:
        campaign = await self._get_campaign(campaign_id)

        if campaign.status != CampaignStatus.ACTIVE:
            raise ValidationException("status", "Only active campaigns can be paused")

        campaign = await self.campaign_repo.update(
            replace(campaign, status=CampaignStatus.PAUSED, is_active=False)
        )
        logger.info(f"Campaign {campaign.id} paused by admin {admin.id}")
        return campaign

    async def _get_campaign(self, campaign_id: UUID) -> BusinessCampaign:
        campaign = await self.campaign_repo.get_by_id(campaign_id)
        if not campaign:
            raise ResourceNotFoundException("Campaign", str(campaign_id))
        return campaign

    # Free posting whitelist

    async def list_whitelist(self) -> List[User]:
        return await self.user_repo.list_free_posting()

    async def grant_free_posting(self, admin: User, employer_id: UUID, reason: str) -> User:
        employer = await self.user_repo.get_by_id(employer_id)
        if not employer:
            raise ResourceNotFoundException("Employer", str(employer_id))
        if not employer.is_employer():
            raise ValidationException("employer_id", "User is not an employer")
        if employer.free_posting_enabled:
            raise ValidationException("employer_id", "Employer already has free posting enabled")

        now = datetime.utcnow()
        employer = await self.user_repo.update(replace(
            employer,
            free_posting_enabled=True,
            free_posting_reason=reason,
            free_posting_granted_by=admin.id,
            free_posting_granted_at=now,
            updated_at=now,
        ))
        logger.info(f"Free posting granted to employer {employer.id} by admin {admin.id}: {reason}")
        return employer

    async def revoke_free_posting(self, admin: User, employer_id: UUID) -> User:
        employer = await self.user_repo.get_by_id(employer_id)
        if not employer:
            raise ResourceNotFoundException("Employer", str(employer_id))
        if not employer.free_posting_enabled:
            raise ValidationException("employer_id", "Employer does not have free posting enabled")

        employer = await self.user_repo.update(replace(
            employer,
            free_posting_enabled=False,
            free_posting_reason=None,
            free_posting_granted_by=None,
            free_posting_granted_at=None,
            updated_at=datetime.utcnow(),
        ))
        logger.info(f"Free posting revoked for employer {employer.id} by admin {admin.id}")
        return employer
