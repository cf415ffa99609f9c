"""
Dependency Injection Container
Manages service and repository instances
"""
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends

from core.config import settings
from core.database import get_db
from application.repositories.interfaces import (
    ICampaignRepository,
    IJobRepository,
    ILocationRepository,
    IPricingRuleRepository,
    IUserRepository,
)
from application.services.auth.interfaces import IJwtService
from application.services.business_control import IBusinessControlService
from application.services.jobs import IJobService
from application.services.pricing import PricingEngine, PriceTable
from infrastructure.persistence.repositories.campaign import SQLAlchemyCampaignRepository
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.location import SQLAlchemyLocationRepository
from infrastructure.persistence.repositories.pricing_rule import SQLAlchemyPricingRuleRepository
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.security.jwt_service import JwtService


# Singleton instances
_jwt_service: IJwtService | None = None
_pricing_engine: PricingEngine | None = None


def get_jwt_service() -> IJwtService:
    """Get JWT service instance (singleton)"""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JwtService()
    return _jwt_service


def get_pricing_engine() -> PricingEngine:
    """Get pricing engine instance (singleton)"""
    global _pricing_engine
    if _pricing_engine is None:
        _pricing_engine = PricingEngine(
            PriceTable(settings.PRICING_BASE_PRICES),
            currency=settings.PRICING_CURRENCY,
        )
    return _pricing_engine


def get_user_repository(
    session: AsyncSession = Depends(get_db)
) -> IUserRepository:
    """Get user repository instance (per-request)"""
    return SQLAlchemyUserRepository(session)


def get_job_repository(
    session: AsyncSession = Depends(get_db)
) -> IJobRepository:
    """Get job repository instance (per-request)"""
    return SQLAlchemyJobRepository(session)


def get_location_repository(
    session: AsyncSession = Depends(get_db)
) -> ILocationRepository:
    return SQLAlchemyLocationRepository(session)


def get_pricing_rule_repository(
    session: AsyncSession = Depends(get_db)
) -> IPricingRuleRepository:
    return SQLAlchemyPricingRuleRepository(session)


def get_campaign_repository(
    session: AsyncSession = Depends(get_db)
) -> ICampaignRepository:
    return SQLAlchemyCampaignRepository(session)


def get_job_service(
    job_repo: IJobRepository = Depends(get_job_repository),
    location_repo: ILocationRepository = Depends(get_location_repository),
    rule_repo: IPricingRuleRepository = Depends(get_pricing_rule_repository),
    campaign_repo: ICampaignRepository = Depends(get_campaign_repository),
    pricing_engine: PricingEngine = Depends(get_pricing_engine)
) -> IJobService:
    """Get job service instance (per-request)"""
    from infrastructure.services.job_service import JobService
    return JobService(job_repo, location_repo, rule_repo, campaign_repo, pricing_engine)


def get_business_control_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    rule_repo: IPricingRuleRepository = Depends(get_pricing_rule_repository),
    campaign_repo: ICampaignRepository = Depends(get_campaign_repository)
) -> IBusinessControlService:
    """Get business control service instance (per-request)"""
    from infrastructure.services.business_control_service import BusinessControlService
    return BusinessControlService(user_repo, rule_repo, campaign_repo)
