"""
Business Control Endpoints
Admin-only management of pricing rules, campaigns and free posting
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from domain.entities import User
from domain.enums import CampaignStatus, RuleCategory
from application.services.business_control import IBusinessControlService
from presentation.api.v1.container import get_business_control_service
from presentation.api.v1.dependencies import require_admin
from presentation.api.v1.schemas.business_control import (
    CampaignCreateRequest,
    CampaignResponse,
    PricingRuleCreateRequest,
    PricingRuleResponse,
    WhitelistEntryResponse,
    WhitelistGrantRequest,
)


router = APIRouter(prefix="/admin")


# Pricing rules

@router.get("/pricing-rules")
async def list_pricing_rules(
    category: Optional[RuleCategory] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    rules, pagination = await service.list_rules(category, is_active, page, limit)
    return {
        "success": True,
        "data": {
            "rules": [PricingRuleResponse.from_entity(r) for r in rules],
            "pagination": pagination.to_dict(total_key="total_rules"),
        },
    }


@router.post("/pricing-rules", status_code=status.HTTP_201_CREATED)
async def create_pricing_rule(
    request: PricingRuleCreateRequest,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    rule = await service.create_rule(admin, request)
    return {
        "success": True,
        "message": "Pricing rule created",
        "data": {"rule": PricingRuleResponse.from_entity(rule)},
    }


@router.patch("/pricing-rules/{rule_id}/toggle")
async def toggle_pricing_rule(
    rule_id: UUID,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    rule = await service.toggle_rule(admin, rule_id)
    return {
        "success": True,
        "message": f"Pricing rule {'activated' if rule.is_active else 'deactivated'}",
        "data": {"rule": PricingRuleResponse.from_entity(rule)},
    }


# Campaigns

@router.get("/campaigns")
async def list_campaigns(
    status_filter: Optional[CampaignStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    campaigns, pagination = await service.list_campaigns(status_filter, page, limit)
    return {
        "success": True,
        "data": {
            "campaigns": [CampaignResponse.from_entity(c) for c in campaigns],
            "pagination": pagination.to_dict(total_key="total_campaigns"),
        },
    }


@router.post("/campaigns", status_code=status.HTTP_201_CREATED)
async def create_campaign(
    request: CampaignCreateRequest,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    campaign = await service.create_campaign(admin, request)
    return {
        "success": True,
        "message": "Campaign created",
        "data": {"campaign": CampaignResponse.from_entity(campaign)},
    }


@router.patch("/campaigns/{campaign_id}/activate")
async def activate_campaign(
    campaign_id: UUID,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    campaign = await service.activate_campaign(admin, campaign_id)
    return {
        "success": True,
        "message": "Campaign activated",
        "data": {"campaign": CampaignResponse.from_entity(campaign)},
    }


@router.patch("/campaigns/{campaign_id}/pause")
async def pause_campaign(
    campaign_id: UUID,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    campaign = await service.pause_campaign(admin, campaign_id)
    return {
        "success": True,
        "message": "Campaign paused",
        "data": {"campaign": CampaignResponse.from_entity(campaign)},
    }


# Free posting whitelist

@router.get("/whitelist")
async def list_whitelist(
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    employers = await service.list_whitelist()
    return {
        "success": True,
        "data": {
            "employers": [WhitelistEntryResponse.from_user(e) for e in employers],
            "total": len(employers),
        },
    }


@router.post("/whitelist/{employer_id}")
async def grant_free_posting(
    employer_id: UUID,
    request: WhitelistGrantRequest,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    employer = await service.grant_free_posting(admin, employer_id, request.reason)
    return {
        "success": True,
        "message": "Free posting enabled",
        "data": {"employer": WhitelistEntryResponse.from_user(employer)},
    }


@router.delete("/whitelist/{employer_id}")
async def revoke_free_posting(
    employer_id: UUID,
    admin: User = Depends(require_admin),
    service: IBusinessControlService = Depends(get_business_control_service)
):
    employer = await service.revoke_free_posting(admin, employer_id)
    return {
        "success": True,
        "message": "Free posting disabled",
        "data": {"employer": WhitelistEntryResponse.from_user(employer)},
    }
